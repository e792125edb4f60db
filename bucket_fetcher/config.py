# bucket_fetcher/config.py
import os

BUCKET_MANIFEST = os.getenv('BUCKET_MANIFEST', '')
SECRET_MANIFEST = os.getenv('SECRET_MANIFEST', '')
CERT_SECRET_MANIFEST = os.getenv('CERT_SECRET_MANIFEST', '')
PROXY_SECRET_MANIFEST = os.getenv('PROXY_SECRET_MANIFEST', '')
OUTPUT_DIR = os.getenv('OUTPUT_DIR', '/app/shared/bucket')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
