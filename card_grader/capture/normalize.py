"""Image decoding and normalization to the fixed grading grid."""

import base64
import binascii
import re
from pathlib import Path
from typing import Any, Union

import cv2
import numpy as np

from ..core.constants import IMAGE_SIZE, PIXEL_SCALE
from ..core.types import ImageSide, NormalizedImage
from ..utils.error_handler import DecodeError, InputValidationError
from ..utils.log import LoggerMixin
from ..utils.validation import validate_image_payload

ImagePayload = Union[bytes, bytearray, memoryview, str, Path, np.ndarray]

DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w/+.-]*)?(?P<params>(?:;[^,;]+)*),(?P<data>.*)$", re.DOTALL)


class ImageNormalizer(LoggerMixin):
    """Decodes image payloads and resamples them to a 224x224x3 grid."""

    def __init__(self, size: int = IMAGE_SIZE):
        self.size = size

    def decode(self, payload: ImagePayload, side: ImageSide = ImageSide.FRONT) -> np.ndarray:
        """
        Decode a payload into an RGB uint8 array (H, W, 3).

        Raises:
            InputValidationError: If the payload is missing or unsupported
            DecodeError: If the payload cannot be decoded or has zero area
        """
        side = ImageSide(side)
        validate_image_payload(payload, side.value)

        if isinstance(payload, np.ndarray):
            image = self._from_array(payload, side)
        elif isinstance(payload, (bytes, bytearray, memoryview)):
            image = self._from_bytes(bytes(payload), side)
        elif isinstance(payload, str) and payload.startswith("data:"):
            image = self._from_bytes(self._decode_data_uri(payload, side), side)
        else:
            image = self._from_path(Path(payload), side)

        height, width = image.shape[:2]
        if height == 0 or width == 0:
            raise DecodeError(
                f"Decoded {side.value} image has zero area",
                side=side.value,
                details={"width": width, "height": height},
            )
        return image

    def normalize(self, payload: ImagePayload, side: ImageSide = ImageSide.FRONT) -> NormalizedImage:
        """Decode and resample a payload to the normalized grading grid."""
        side = ImageSide(side)
        context = self.log_start("Image normalization", side=side.value)
        image = self.decode(payload, side)
        normalized = self.normalize_decoded(image, side)
        self.log_success(context, source_size=normalized.source_size)
        return normalized

    def normalize_decoded(self, image: np.ndarray, side: ImageSide = ImageSide.FRONT) -> NormalizedImage:
        """Resample an already decoded RGB array with nearest-neighbour lookup."""
        height, width = image.shape[:2]
        resized = cv2.resize(image, (self.size, self.size), interpolation=cv2.INTER_NEAREST)
        pixels = resized.astype(np.float64) / PIXEL_SCALE
        return NormalizedImage(pixels, side=ImageSide(side), source_size=(width, height))

    def _decode_data_uri(self, uri: str, side: ImageSide) -> bytes:
        match = DATA_URI_PATTERN.match(uri)
        if not match:
            raise DecodeError(f"Malformed data URI for {side.value} image", side=side.value)

        data = match.group("data")
        try:
            if ";base64" in (match.group("params") or ""):
                return base64.b64decode(data, validate=True)
            return data.encode("latin-1")
        except (binascii.Error, ValueError, UnicodeEncodeError) as e:
            raise DecodeError(
                f"Invalid data URI payload for {side.value} image",
                side=side.value,
                details={"error": str(e)},
            ) from e

    def _from_bytes(self, data: bytes, side: ImageSide) -> np.ndarray:
        if not data:
            raise DecodeError(f"Empty {side.value} image payload", side=side.value)

        buffer = np.frombuffer(data, dtype=np.uint8)
        decoded = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED)
        if decoded is None:
            raise DecodeError(
                f"Could not decode {side.value} image",
                side=side.value,
                details={"payload_bytes": len(data)},
            )
        return self._to_rgb(decoded, side)

    def _from_path(self, path: Path, side: ImageSide) -> np.ndarray:
        try:
            exists = path.is_file()
        except OSError:
            exists = False
        if not exists:
            raise InputValidationError(
                f"{side.value} image file does not exist: {path}",
                details={"side": side.value, "path": str(path)},
            )
        return self._from_bytes(path.read_bytes(), side)

    def _from_array(self, array: np.ndarray, side: ImageSide) -> np.ndarray:
        if array.size == 0:
            raise DecodeError(
                f"Decoded {side.value} image has zero area",
                side=side.value,
                details={"shape": array.shape},
            )
        if array.dtype != np.uint8:
            # Float arrays are taken as already scaled to [0, 1]
            if np.issubdtype(array.dtype, np.floating):
                array = np.clip(array * PIXEL_SCALE, 0, PIXEL_SCALE)
            array = array.astype(np.uint8)
        if array.ndim == 3 and array.shape[2] in (3, 4):
            # Arrays are taken as RGB(A) already
            return np.ascontiguousarray(array[:, :, :3])
        return self._to_rgb(array, side)

    def _to_rgb(self, image: Any, side: ImageSide) -> np.ndarray:
        if image.dtype != np.uint8:
            # 16-bit PNG/TIFF
            image = (image / 257).astype(np.uint8)

        if image.ndim == 2:
            return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
        if image.ndim == 3 and image.shape[2] == 1:
            return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2RGB)
        if image.ndim == 3 and image.shape[2] == 3:
            return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        if image.ndim == 3 and image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)

        raise DecodeError(
            f"Unsupported channel layout for {side.value} image",
            side=side.value,
            details={"shape": image.shape},
        )


def normalize_image(payload: ImagePayload, side: ImageSide = ImageSide.FRONT) -> NormalizedImage:
    """Decode and normalize a payload with the default normalizer."""
    return image_normalizer.normalize(payload, side)


# Global singleton
image_normalizer = ImageNormalizer()
