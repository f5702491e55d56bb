# hostel_ops/storage.py
import datetime
import uuid

from minio import Minio

from .core import ValidationError, get_settings

settings = get_settings()

ENDPOINT = settings.S3_ENDPOINT
BUCKET = settings.S3_BUCKET

# Folder inside the bucket for each kind of upload
UPLOAD_KINDS = {
    "receipts": "receipts",
    "bills": "bills",
    "id-photos": "id-photos",
}
ALLOWED_CONTENT_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "application/pdf": ".pdf",
}

client_kwargs = {
    "access_key": settings.S3_ACCESS_KEY,
    "secret_key": settings.S3_SECRET_KEY,
    "secure": settings.S3_SECURE,
}
if settings.S3_REGION:
    client_kwargs["region"] = settings.S3_REGION

client = Minio(ENDPOINT, **client_kwargs)


def object_name_for(kind: str, content_type: str) -> str:
    """Object key for a new upload, e.g. ``receipts/3f2a...c1.jpg``

    The extension follows the accepted content type, never the client's filename.
    """
    if kind not in UPLOAD_KINDS:
        raise ValidationError(f"Unknown upload kind '{kind}'", field="kind")
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError("Only PNG, JPEG and PDF files are accepted", field="file")
    return f"{UPLOAD_KINDS[kind]}/{uuid.uuid4().hex}{ALLOWED_CONTENT_TYPES[content_type]}"


def upload_file(kind: str, upload_file) -> str:
    """Upload FastAPI UploadFile -> returns object key"""
    object_name = object_name_for(kind, upload_file.content_type)
    upload_file.file.seek(0)
    client.put_object(
        bucket_name=BUCKET,
        object_name=object_name,
        data=upload_file.file,
        length=-1,                      # multipart
        part_size=10*1024*1024,
        content_type=upload_file.content_type
    )
    return object_name


def presigned(object_name: str, seconds: int = 3600) -> str:
    """Temporary download URL for a stored receipt, bill or ID photo"""
    folder, _, name = (object_name or "").partition("/")
    if folder not in UPLOAD_KINDS.values() or not name or "/" in name:
        raise ValidationError("Unknown file key", field="key")
    return client.presigned_get_object(
        BUCKET, object_name,
        expires=datetime.timedelta(seconds=seconds)
    )
