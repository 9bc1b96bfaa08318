# portfolio/routers/contact.py
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse

from portfolio.core.mailer import DeliveryError, ErrorKind, Mailer, MailerInitError, get_mailer
from portfolio.core.settings import DeliveryConfig, get_delivery_config
from portfolio.lib.contact_form import (
    CONTACT_FIELDS,
    ContactSubmission,
    build_body,
    build_subject,
    validate_submission,
)
from portfolio.lib.form_state import FORM_SEQUENCE, SUCCESS_SEQUENCE, element_delays

router = APIRouter(prefix="/api", tags=["contact"])
log = logging.getLogger("uvicorn.error")

CONFIG_ERROR_MESSAGE = "Server configuration error. Please contact the administrator."
INIT_ERROR_MESSAGE = "Failed to initialize email service."

DELIVERY_ERROR_MESSAGES = {
    ErrorKind.MESSAGE_REJECTED: "Email service configuration issue. Please contact directly.",
    ErrorKind.SENDING_PAUSED: "Email service is temporarily unavailable.",
    ErrorKind.INVALID_PARAMETER: "Email configuration error. Please contact directly.",
    ErrorKind.CREDENTIALS_ERROR: "Authentication error. Please contact the administrator.",
    ErrorKind.UNKNOWN: "Failed to send message. Please try again later.",
}

# botocore enforces the connect and read timeouts; this outer bound only
# catches a mailer that never returns and must outlast both of them.
DELIVERY_GUARD_MARGIN_SECONDS = 5.0


def delivery_deadline(config: DeliveryConfig) -> float:
    return 2 * config.timeout_seconds + DELIVERY_GUARD_MARGIN_SECONDS


@dataclass
class SubmissionResult:
    success: bool = False
    errors: Dict[str, str] = field(default_factory=dict)
    status_code: int = 200

    @classmethod
    def ok(cls) -> "SubmissionResult":
        return cls(success=True)

    @classmethod
    def failure(cls, message: str) -> "SubmissionResult":
        return cls(errors={"message": message}, status_code=500)

    def to_payload(self) -> Dict[str, object]:
        if self.success:
            return {"success": True}
        return {"errors": dict(self.errors)}


class SubmissionHandler:
    def __init__(self, mailer: Mailer):
        self.mailer = mailer

    async def handle(self, submission: ContactSubmission, config: DeliveryConfig) -> SubmissionResult:
        for key, present in config.presence().items():
            log.info(f"[contact] {key} exists: {present}")
        if not config.is_complete:
            log.error("[contact] missing required delivery settings")
            return SubmissionResult.failure(CONFIG_ERROR_MESSAGE)

        log.info(f"[contact] bot check empty: {not submission.is_bot}, message length: {len(submission.message)}")
        if submission.is_bot:
            log.info("[contact] honeypot tripped, returning success without sending")
            return SubmissionResult.ok()

        errors = validate_submission(submission)
        if errors:
            log.info(f"[contact] validation errors: {sorted(errors)}")
            return SubmissionResult(errors=errors)

        try:
            message_id = await self._deliver(submission, config)
        except MailerInitError:
            return SubmissionResult.failure(INIT_ERROR_MESSAGE)
        except DeliveryError as e:
            log.error(f"[contact] delivery failed: kind={e.kind.value} detail={e.detail!r}")
            return SubmissionResult.failure(DELIVERY_ERROR_MESSAGES[e.kind])
        except Exception as exc:
            log.error(f"[contact] delivery failed unexpectedly: {exc!r}")
            return SubmissionResult.failure(DELIVERY_ERROR_MESSAGES[ErrorKind.UNKNOWN])

        log.info(f"[contact] email sent: {message_id}")
        return SubmissionResult.ok()

    async def _deliver(self, submission: ContactSubmission, config: DeliveryConfig) -> str:
        subject = build_subject(submission.email)
        log.info(f"[contact] sending to={config.recipient} from={config.sender} subject={subject!r}")
        call = asyncio.to_thread(
            self.mailer.send,
            [config.recipient],
            config.sender,
            [submission.email],
            subject,
            build_body(submission.email, submission.message),
        )
        deadline = delivery_deadline(config)
        try:
            return await asyncio.wait_for(call, timeout=deadline)
        except asyncio.TimeoutError as e:
            raise DeliveryError(ErrorKind.UNKNOWN, f"no response after {deadline}s") from e


def get_submission_handler(mailer: Mailer = Depends(get_mailer)) -> SubmissionHandler:
    return SubmissionHandler(mailer)


@router.post("/contact")
async def submit_contact(
    name: Optional[str] = Form(default=""),
    email: Optional[str] = Form(default=""),
    message: Optional[str] = Form(default=""),
    config: DeliveryConfig = Depends(get_delivery_config),
    handler: SubmissionHandler = Depends(get_submission_handler),
):
    submission = ContactSubmission.from_form(name, email, message)
    result = await handler.handle(submission, config)
    return JSONResponse(result.to_payload(), status_code=result.status_code)


@router.get("/contact/form")
async def contact_form():
    return {
        "fields": [f.to_dict() for f in CONTACT_FIELDS],
        "delays": {
            "form": element_delays(FORM_SEQUENCE),
            "success": element_delays(SUCCESS_SEQUENCE),
        },
    }
