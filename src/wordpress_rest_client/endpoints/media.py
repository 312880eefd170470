"""Media endpoints (``/wp/v2/media``).

Uploads go out as ``multipart/form-data`` with the binary under the
``file`` field and every other field as a plain form value.
"""

import mimetypes
from typing import IO, Any

from ..wpapi import CancellationToken, RequestExecutor
from ..wpapi.types import Media
from .base import ResourceEndpoints

BASE_PATH = "/wp/v2/media"
FILE_FIELD = "file"


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class MediaEndpoints(ResourceEndpoints[Media]):
    def __init__(self, executor: RequestExecutor):
        super().__init__(executor, BASE_PATH, Media)

    async def create(  # type: ignore[override]
        self,
        file: bytes | IO[bytes],
        filename: str = "upload",
        content_type: str | None = None,
        cancel: CancellationToken | None = None,
        **fields: Any,
    ) -> Media:
        """Upload a file to the media library.

        Args:
            file: File contents or an open binary file.
            filename: Name WordPress stores the upload under.
            content_type: MIME type; guessed from ``filename`` when omitted.
            cancel: Optional cancellation token.
            **fields: Extra attachment fields (``title``, ``alt_text``,
                ``caption``, ``post``, ...). None values are skipped.

        Returns:
            The created attachment.
        """
        content_type = (
            content_type
            or mimetypes.guess_type(filename)[0]
            or "application/octet-stream"
        )
        files = {FILE_FIELD: (filename, file, content_type)}
        data = {key: _form_value(value) for key, value in fields.items() if value is not None}
        result = await self._executor.upload(self.base_path, files, data, cancel)
        return Media.model_validate(result)
