"""Cloudinary upload API client."""

import hashlib
import json
import logging
import time
from pathlib import Path

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cdn_responsive_images.config import (
    BREAKPOINT_SETTINGS,
    CLOUDINARY_API_BASE,
    CLOUDINARY_API_KEY,
    CLOUDINARY_API_SECRET,
    CLOUDINARY_CLOUD_NAME,
)
from cdn_responsive_images.models import Breakpoint, UploadResult

log = logging.getLogger(__name__)

# Parameters that are sent but never part of the signature
_UNSIGNED_PARAMS = {"file", "api_key", "resource_type", "cloud_name"}


def is_configured() -> bool:
    """True when all Cloudinary credentials are set."""
    return bool(CLOUDINARY_CLOUD_NAME and CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET)


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """SHA-1 signature over the sorted ``key=value`` pairs followed by the secret."""
    to_sign = "&".join(
        f"{key}={value}"
        for key, value in sorted(params.items())
        if key not in _UNSIGNED_PARAMS and value not in (None, "")
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class CloudinaryClient:
    """Client for the Cloudinary upload API."""

    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        timeout: int = 60,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.cloud_name = cloud_name or CLOUDINARY_CLOUD_NAME
        self.api_key = api_key or CLOUDINARY_API_KEY
        self.api_secret = api_secret or CLOUDINARY_API_SECRET
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise ValueError(
                "Cloudinary credentials are required. Set CLOUDINARY_CLOUD_NAME, "
                "CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET in .env file."
            )
        self.timeout = timeout
        self.transport = transport

    @property
    def upload_url(self) -> str:
        return f"{CLOUDINARY_API_BASE}/{self.cloud_name}/image/upload"

    def upload(self, file_path: str | Path) -> UploadResult | None:
        """Upload an image and request responsive breakpoints for it.

        Returns None if the upload failed or the response has no public ID.
        """
        params = {
            "timestamp": str(int(time.time())),
            "use_filename": "true",
            "responsive_breakpoints": json.dumps([BREAKPOINT_SETTINGS]),
        }
        params["signature"] = sign_params(params, self.api_secret)
        params["api_key"] = self.api_key

        path = Path(file_path)
        try:
            data = self._post(path, params)
        except httpx.HTTPError as e:
            log.warning("Upload of %s failed: %s", path, e)
            return None
        except OSError as e:
            log.warning("Could not read %s for upload: %s", path, e)
            return None

        if "public_id" not in data:
            log.warning("Upload of %s returned no public_id: %s", path, data.get("error", data))
            return None
        return parse_upload_response(data)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, max=10),
        retry=retry_if_exception_type(httpx.TimeoutException),
        reraise=True,
    )
    def _post(self, path: Path, params: dict[str, str]) -> dict:
        """POST the file and return the parsed JSON."""
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            with path.open("rb") as fh:
                resp = client.post(self.upload_url, data=params, files={"file": (path.name, fh)})
            resp.raise_for_status()
        return resp.json()


def parse_upload_response(data: dict) -> UploadResult:
    """Convert an upload API response to an UploadResult."""
    breakpoints: list[Breakpoint] = []
    for group in data.get("responsive_breakpoints") or []:
        for bp in group.get("breakpoints", []):
            breakpoints.append(
                Breakpoint(
                    width=int(bp["width"]),
                    height=int(bp["height"]),
                    bytes=bp.get("bytes"),
                    url=bp.get("url"),
                    secure_url=bp["secure_url"],
                )
            )
        # Only one breakpoint setting is ever requested
        break

    return UploadResult(
        public_id=data["public_id"],
        width=int(data["width"]),
        height=int(data["height"]),
        bytes=data.get("bytes"),
        url=data["url"],
        secure_url=data["secure_url"],
        breakpoints=breakpoints,
    )
