"""
Pending Uploads

Audio files are written outside the database transaction. PendingUploads
tracks every file written for one submission and deletes them on exit
unless ``keep()`` was called after the rows were committed.
"""

import logging
import os
import posixpath
import secrets
import time

from geschichten.errors import ValidationError

logger = logging.getLogger(__name__)


def file_extension(file_storage):
    return os.path.splitext(file_storage.filename or '')[1].lower()


def file_size(file_storage):
    stream = file_storage.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def _format_size(num_bytes):
    if num_bytes >= 1024 * 1024:
        return f'{num_bytes // (1024 * 1024)} MB'
    return f'{num_bytes} bytes'


def check_audio_files(files, allowed_extensions, max_bytes):
    """Reject the whole batch if any file has the wrong type or size.

    Runs before anything is written, so a rejected request leaves no file.
    """
    for file_storage in files:
        if file_extension(file_storage) not in allowed_extensions:
            raise ValidationError('Only MP3 audio files are allowed.')
        if file_size(file_storage) > max_bytes:
            raise ValidationError(f'Audio files must be {_format_size(max_bytes)} or smaller.')


def generate_filename(extension):
    """Timestamp plus random suffix, keeping the original extension."""
    return f'{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}{extension}'


class PendingUploads:
    """Files staged for one submission, removed unless kept."""

    def __init__(self, folder, url_prefix):
        self.folder = folder
        self.url_prefix = url_prefix
        self.paths = []
        self.kept = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.kept:
            self.discard()
        return False

    def stage(self, file_storage):
        """Write the file and return its path relative to the static folder."""
        os.makedirs(self.folder, exist_ok=True)
        filename = generate_filename(file_extension(file_storage))
        path = os.path.join(self.folder, filename)
        # Tracked before writing so a partial file is cleaned up too
        self.paths.append(path)
        file_storage.stream.seek(0)
        file_storage.save(path)
        return posixpath.join(self.url_prefix, filename)

    def keep(self):
        self.kept = True

    def discard(self):
        for path in self.paths:
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            except OSError as exc:
                logger.warning('Could not remove upload %s: %s', path, exc)
        if self.paths:
            logger.info('Discarded %d staged upload(s)', len(self.paths))
        self.paths = []
