"""
Object storage for uploaded resume artifacts.

Writes through Django's ``default_storage``, which is Cloudinary raw storage
in production (``CLOUDINARY_URL`` set) and the local file system otherwise.
"""
import logging
import os
import re
from typing import Dict

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from resume_analysis.exceptions import ArtifactUploadError

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSION_RX = re.compile(r'\.(pdf|docx?)$', re.IGNORECASE)


def text_artifact_name(file_name: str) -> str:
    """Name under which the extracted text of ``file_name`` is stored."""
    base = os.path.basename(file_name or '') or 'resume'
    if DOCUMENT_EXTENSION_RX.search(base):
        return DOCUMENT_EXTENSION_RX.sub('.txt', base)
    if not base.lower().endswith('.txt'):
        return f'{base}.txt'
    return base


def upload_resume_artifact(content: bytes, name: str, owner_id) -> Dict[str, str]:
    """
    Store ``content`` for ``owner_id`` and return its URL and storage id.

    Returns:
        {"url": ..., "public_id": ...}; ``public_id`` is the storage name used
        by ``delete_resume_artifact``.
    """
    path = f'resumes/{owner_id}/{name}'
    try:
        saved_name = default_storage.save(path, ContentFile(content))
        url = default_storage.url(saved_name)
    except Exception as exc:
        logger.exception('Failed to upload resume artifact %s', path)
        raise ArtifactUploadError('Failed to store the resume file.') from exc

    logger.info('Stored resume artifact %s (%s bytes)', saved_name, len(content))
    return {'url': url, 'public_id': saved_name}


def delete_resume_artifact(public_id: str) -> bool:
    """
    Delete a stored artifact.

    Returns:
        True if a file was removed, False if there was nothing to remove
    """
    if not public_id:
        return False
    try:
        if not default_storage.exists(public_id):
            return False
        default_storage.delete(public_id)
    except Exception as exc:
        logger.exception('Failed to delete resume artifact %s', public_id)
        raise ArtifactUploadError('Failed to delete the resume file.') from exc
    logger.info('Deleted resume artifact %s', public_id)
    return True
