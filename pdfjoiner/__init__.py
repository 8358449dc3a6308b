"""PDF Joiner: رفع ملفات PDF وترتيبها ثم تنزيلها كملف واحد مدمج."""

__version__ = "0.1.0"
