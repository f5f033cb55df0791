"""In-memory email provider for tests and dry runs."""

from mailbridge.infrastructure.email.providers.loopback.outbound import (
    LoopbackAdapter,
    LoopbackConfig,
    SentCall,
)

__all__ = ["LoopbackAdapter", "LoopbackConfig", "SentCall"]
