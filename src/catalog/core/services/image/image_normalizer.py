"""Re-encoding of uploaded images into the stored canonical format."""

import io

from loguru import logger
from PIL import Image, UnidentifiedImageError

from src.catalog.core.errors import InvalidInputError
from src.catalog.runtime.config.config_data import ImageConfig
from src.catalog.runtime.context import get_config


class ImageNormalizerService:
    """Convert raw upload bytes into the configured encoding (PNG by default)."""

    def __init__(self, config: ImageConfig | None = None):
        self._config = config or get_config().images

    @property
    def media_type(self) -> str:
        return self._config.media_type

    def normalize(self, raw: bytes) -> bytes:
        if not raw:
            raise InvalidInputError("image file is empty")
        if len(raw) > self._config.max_upload_bytes:
            raise InvalidInputError(
                f"image exceeds the {self._config.max_upload_bytes} byte upload limit"
            )

        try:
            with Image.open(io.BytesIO(raw)) as img:
                img.load()
                if img.mode not in ("RGB", "RGBA", "L", "LA"):
                    img = img.convert("RGBA")
                output_buffer = io.BytesIO()
                img.save(output_buffer, format=self._config.output_format)
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as e:
            logger.info("Rejected image upload: {}", e)
            raise InvalidInputError("uploaded file is not a readable image") from e

        return output_buffer.getvalue()
