"""Image attachment handling for prompts.

Validates uploaded or captured images and converts them between raw
bytes, data URIs and the inline payload sent to the language model.
"""

import base64
import binascii
import logging

from src.models.schemas import InlineImage

logger = logging.getLogger(__name__)

# Constants
MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB
DATA_URI_PREFIX = "data:"
DEFAULT_IMAGE_PROMPT = "Describe this image in detail"


class ImageAttachmentError(Exception):
    """Raised when an image cannot be attached to a prompt."""

    pass


def _validate_image(content: bytes, mime_type: str, max_size: int) -> None:
    """Validate image content before attaching it.

    Raises:
        ImageAttachmentError: If validation fails.
    """
    if not content:
        raise ImageAttachmentError("Empty file provided")

    if not mime_type.startswith("image/"):
        raise ImageAttachmentError(f"Unsupported file type: {mime_type or 'unknown'}")

    if len(content) > max_size:
        size_mb = len(content) / (1024 * 1024)
        limit_mb = max_size / (1024 * 1024)
        raise ImageAttachmentError(
            f"File too large ({size_mb:.1f}MB). Please upload an image smaller than {limit_mb:.0f}MB."
        )


def to_data_uri(content: bytes, mime_type: str) -> str:
    """Encode raw image bytes as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"{DATA_URI_PREFIX}{mime_type};base64,{encoded}"


def split_data_uri(data_uri: str) -> InlineImage:
    """Split a base64 data URI into its MIME type and payload.

    Raises:
        ImageAttachmentError: If the string is not a base64 data URI.
    """
    if not data_uri.startswith(DATA_URI_PREFIX) or "," not in data_uri:
        raise ImageAttachmentError("Invalid data URI")

    header, data = data_uri[len(DATA_URI_PREFIX) :].split(",", 1)
    mime_type, _, encoding = header.partition(";")
    if encoding != "base64":
        raise ImageAttachmentError("Data URI is not base64 encoded")

    try:
        base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ImageAttachmentError(f"Invalid base64 payload: {e}") from e

    return InlineImage(mime_type=mime_type, base64_data=data)


class ImageAttachment:
    """The image currently attached to the prompt being composed.

    Holds at most one image. The preview is the data URI shown in the
    input row and stored on the user message.
    """

    def __init__(self, max_size: int = MAX_IMAGE_SIZE) -> None:
        self._max_size = max_size
        self._mime_type: str | None = None
        self._preview: str | None = None

    @property
    def preview(self) -> str | None:
        return self._preview

    @property
    def mime_type(self) -> str | None:
        return self._mime_type

    def __bool__(self) -> bool:
        return self._preview is not None

    def attach(self, content: bytes, mime_type: str, name: str = "image") -> str:
        """Attach an image, replacing any previous one.

        Args:
            content: Raw image bytes.
            mime_type: MIME type reported by the upload.
            name: File name, for logging.

        Returns:
            The data URI preview of the attached image.

        Raises:
            ImageAttachmentError: If the image is empty, not an image or too large.
        """
        _validate_image(content, mime_type, self._max_size)
        self._mime_type = mime_type
        self._preview = to_data_uri(content, mime_type)
        logger.info(f"Attached image {name} ({mime_type}, {len(content)} bytes)")
        return self._preview

    def clear(self) -> None:
        self._mime_type = None
        self._preview = None

    def to_inline_image(self) -> InlineImage | None:
        """Payload for the language model, or None when nothing is attached."""
        if self._preview is None:
            return None
        return split_data_uri(self._preview)
