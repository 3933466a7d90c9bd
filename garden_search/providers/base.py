"""Chat client protocol.

The search stages depend on this protocol rather than on a concrete HTTP
client, so tests (and other providers) can stand in for OpenRouterClient.
"""

from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from garden_search.domain.models import ChatResult


class ChatClient(Protocol):
    """Chat-completion client protocol.

    - chat: full call, returns a ChatResult.
    - chat_simple: text in, text out.
    - chat_structured: strict json_schema call, returns the decoded object.
    """

    name: str

    def chat(
        self,
        messages: Sequence[Any],
        model: Optional[str] = None,
        response_format: Optional[Mapping[str, Any]] = None,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> ChatResult:
        ...

    def chat_simple(
        self,
        user_message: str,
        system_message: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        ...

    def chat_structured(
        self,
        messages: Sequence[Any],
        model: Optional[str],
        schema_name: str,
        schema: Dict[str, Any],
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        ...
