from typing import Optional


class ScanError(Exception):
    """Base class for scan service errors."""


class ScanConfigurationError(ScanError):
    """No upstream scan endpoint is configured."""


class InvalidScanURLError(ScanError):
    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__("Please enter a valid http/https URL.")


class ScanRequestError(ScanError):
    """
    Upstream scan request failed.
    status_code is None when the request never got a response.
    """

    def __init__(self, status_code: Optional[int], body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            msg = f"Scan request failed: {body}".strip()
        else:
            msg = f"Scan request failed: HTTP {status_code} {body}".strip()
        super().__init__(msg)
