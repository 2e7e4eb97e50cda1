import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union


class InvalidAlertError(ValueError):
    """Corpo recebido não tem o formato {"text": "..."} esperado."""


def _find_text(data: Dict[str, Any]) -> Optional[Any]:
    """
    Nome do campo comparado sem diferenciar maiúsculas ("Text", "TEXT").
    Se houver mais de um, vale o último; null não sobrescreve valor anterior.
    """
    text = None
    for key, value in data.items():
        if key.lower() == "text" and value is not None:
            text = value
    return text


@dataclass(frozen=True)
class InboundAlert:
    text: str

    @classmethod
    def from_body(cls, body: Union[bytes, str]) -> "InboundAlert":
        """
        Converte o corpo cru do webhook do TrueNAS.
        Campos além de 'text' são ignorados. Bytes UTF-8 inválidos viram U+FFFD.
        """
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise InvalidAlertError(f"invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise InvalidAlertError("payload is not a JSON object")
        text = _find_text(data)
        if text is not None and not isinstance(text, str):
            raise InvalidAlertError("'text' field is not a string")
        if not text:
            raise InvalidAlertError("missing 'text' field")
        return cls(text=text)


@dataclass(frozen=True)
class OutboundNotification:
    title: str
    message: str

    def to_payload(self) -> Dict[str, str]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_payload())
