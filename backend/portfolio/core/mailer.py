# portfolio/core/mailer.py
import logging
from enum import Enum
from typing import List, Protocol

from fastapi import Depends

from portfolio.core.settings import DeliveryConfig, get_delivery_config

log = logging.getLogger("uvicorn.error")


class ErrorKind(str, Enum):
    MESSAGE_REJECTED = "message-rejected"
    SENDING_PAUSED = "sending-paused"
    INVALID_PARAMETER = "invalid-parameter"
    CREDENTIALS_ERROR = "credentials-error"
    UNKNOWN = "unknown"


class DeliveryError(Exception):
    def __init__(self, kind: ErrorKind, detail: str = ""):
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail


class MailerInitError(Exception):
    """The email client could not be constructed."""


class Mailer(Protocol):
    def send(
        self,
        destination: List[str],
        source: str,
        reply_to: List[str],
        subject: str,
        body_text: str,
    ) -> str: ...


_CODE_KINDS = {
    "MessageRejected": ErrorKind.MESSAGE_REJECTED,
    "MailFromDomainNotVerifiedException": ErrorKind.MESSAGE_REJECTED,
    "AccountSendingPausedException": ErrorKind.SENDING_PAUSED,
    "ConfigurationSetSendingPausedException": ErrorKind.SENDING_PAUSED,
    "InvalidParameterValue": ErrorKind.INVALID_PARAMETER,
    "InvalidClientTokenId": ErrorKind.CREDENTIALS_ERROR,
    "SignatureDoesNotMatch": ErrorKind.CREDENTIALS_ERROR,
    "UnrecognizedClientException": ErrorKind.CREDENTIALS_ERROR,
    "ExpiredToken": ErrorKind.CREDENTIALS_ERROR,
}


def classify_error(exc: BaseException) -> ErrorKind:
    """Normalize a boto/botocore failure into a single ErrorKind."""
    from botocore.exceptions import ClientError, NoCredentialsError, PartialCredentialsError

    if isinstance(exc, (NoCredentialsError, PartialCredentialsError)):
        return ErrorKind.CREDENTIALS_ERROR
    if isinstance(exc, ClientError):
        code = (exc.response or {}).get("Error", {}).get("Code") or ""
        if code in _CODE_KINDS:
            return _CODE_KINDS[code]
        if code.startswith("AccessDenied"):
            return ErrorKind.CREDENTIALS_ERROR
    return ErrorKind.UNKNOWN


class SesMailer:
    """Amazon SES binding. One attempt per send, no retries."""

    def __init__(self, config: DeliveryConfig, client=None):
        self.config = config
        self._client = client

    @property
    def client(self):
        if self._client is None:
            import boto3
            from botocore.config import Config
            try:
                self._client = boto3.client(
                    "ses",
                    region_name=self.config.region,
                    aws_access_key_id=self.config.access_key_id,
                    aws_secret_access_key=self.config.secret_access_key,
                    config=Config(
                        connect_timeout=self.config.timeout_seconds,
                        read_timeout=self.config.timeout_seconds,
                        retries={"max_attempts": 0},
                    ),
                )
            except Exception as exc:
                log.error(f"[mailer] failed to create SES client: {exc}")
                raise MailerInitError(str(exc)) from exc
            log.info("[mailer] SES client created")
        return self._client

    def send(
        self,
        destination: List[str],
        source: str,
        reply_to: List[str],
        subject: str,
        body_text: str,
    ) -> str:
        from botocore.exceptions import BotoCoreError, ClientError

        client = self.client
        try:
            resp = client.send_email(
                Destination={"ToAddresses": destination},
                Message={
                    "Body": {"Text": {"Data": body_text}},
                    "Subject": {"Data": subject},
                },
                Source=source,
                ReplyToAddresses=reply_to,
            )
        except (ClientError, BotoCoreError) as exc:
            kind = classify_error(exc)
            log.error(f"[mailer] SES send failed ({kind.value}): {exc!r}")
            raise DeliveryError(kind, str(exc)) from exc
        return resp["MessageId"]


def get_mailer(config: DeliveryConfig = Depends(get_delivery_config)) -> Mailer:
    return SesMailer(config)
