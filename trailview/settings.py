"""Runtime settings from the command line and the environment"""

import argparse
import dataclasses
import os
from typing import Mapping
from urllib.parse import urlparse

from trailview.source import DEFAULT_TIMEOUT, LOG_LIMIT, PAPERTRAIL_URL

TOKEN_ENV_VAR = "PAPERTRAIL_KEY"


@dataclasses.dataclass(frozen=True)
class Settings:
    """Everything needed to build the log source and the application"""

    token: str
    url: str = PAPERTRAIL_URL
    limit: int = LOG_LIMIT
    timeout: float = DEFAULT_TIMEOUT
    initial_query: str = ""
    colorize: bool = True

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"'{self.url}' is not an http(s) URL")

    @classmethod
    def from_args(
        cls, args: argparse.Namespace, environ: Mapping[str, str] = os.environ
    ) -> "Settings":
        """Combine parsed arguments with the access token from the environment"""
        return cls(
            token=environ.get(TOKEN_ENV_VAR, ""),
            url=args.url,
            limit=args.limit,
            timeout=args.timeout,
            initial_query=args.query,
            colorize=not args.no_color,
        )
