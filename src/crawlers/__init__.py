"""외부 호스트 요청 (Liveness 프로브) - export only."""

from .http_client import LivenessProber

__all__ = ["LivenessProber"]
