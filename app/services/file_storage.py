# /app/services/file_storage.py

"""
Keeps user uploads (assignment submissions, shared notes) under
UPLOAD_DIR with a random name, and hands back the metadata the models
store. The disk write runs in a worker thread so it never blocks the
event loop.
"""

import asyncio
import os
import uuid
from typing import Dict, Optional

from fastapi import UploadFile

from ..core import config


def _write_file(file_bytes: bytes, upload_dir: str, stored_name: str) -> None:
    os.makedirs(upload_dir, exist_ok=True)
    with open(os.path.join(upload_dir, stored_name), "wb") as out:
        out.write(file_bytes)


async def store_upload(file: UploadFile, upload_dir: Optional[str] = None,
                       empty_message: str = "Please upload a file.") -> Dict:
    """
    Saves the upload and returns `file_name`, `file_url`, `file_type` and
    `file_size`. Raises ValueError for an empty upload.
    """
    upload_dir = upload_dir or config.UPLOAD_DIR
    file_bytes = await file.read()
    if not file_bytes:
        raise ValueError(empty_message)

    extension = os.path.splitext(file.filename or "")[1]
    stored_name = f"{uuid.uuid4().hex}{extension}"
    await asyncio.to_thread(_write_file, file_bytes, upload_dir, stored_name)

    return {
        "file_name": file.filename,
        "file_url": f"uploads/{stored_name}",
        "file_type": file.content_type,
        "file_size": len(file_bytes),
    }
