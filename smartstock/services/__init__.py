"""외부 설명 서비스 클라이언트."""

from .explanation import (
    attach_explanations,
    chat_response,
    explain_forecast,
    explain_simulation,
)

__all__ = [
    "attach_explanations",
    "chat_response",
    "explain_forecast",
    "explain_simulation",
]
