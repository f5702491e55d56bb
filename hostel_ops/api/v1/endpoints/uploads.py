import logging

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from minio.error import S3Error

from hostel_ops.core import PersistenceError
from hostel_ops.storage import presigned, upload_file


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/url")
async def file_url(key: str = Query(..., description="Object key saved on the record")):
    """Short-lived link for viewing a stored receipt, bill or ID photo"""
    try:
        url = await run_in_threadpool(presigned, key)
    except S3Error as exc:
        logger.exception("Could not sign %s", key)
        raise PersistenceError("load file") from exc
    return {"data": {"key": key, "url": url}}


@router.post("/{kind}")
async def upload(kind: str, file: UploadFile = File(...)):
    """Store a receipt, bill or ID photo; returns the object key to save on the record"""
    try:
        key = await run_in_threadpool(upload_file, kind, file)
    except S3Error as exc:
        logger.exception("Upload to %s failed", kind)
        raise PersistenceError("upload file") from exc
    return {"data": {"key": key}, "message": "File uploaded successfully!"}
