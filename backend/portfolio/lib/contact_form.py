import re
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

MAX_EMAIL_LENGTH = 512
MAX_MESSAGE_LENGTH = 4096

# local-part @ domain (2+ chars) . tld (2+ chars)
EMAIL_PATTERN = re.compile(r"^.+@.{2,}\..{2,}$")

HONEYPOT_FIELD = "name"


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    type: str = "text"
    max_length: Optional[int] = None
    required: bool = False
    auto_complete: Optional[str] = None
    multiline: bool = False
    hidden: bool = False

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["maxLength"] = data.pop("max_length")
        data["autoComplete"] = data.pop("auto_complete")
        return data


CONTACT_FIELDS: List[FormField] = [
    FormField(name=HONEYPOT_FIELD, label="Name", max_length=MAX_EMAIL_LENGTH, hidden=True),
    FormField(
        name="email",
        label="Your email",
        type="email",
        max_length=MAX_EMAIL_LENGTH,
        required=True,
        auto_complete="email",
    ),
    FormField(
        name="message",
        label="Message",
        max_length=MAX_MESSAGE_LENGTH,
        required=True,
        auto_complete="off",
        multiline=True,
    ),
]


@dataclass
class ContactSubmission:
    name: str = ""
    email: str = ""
    message: str = ""

    @classmethod
    def from_form(cls, name: Optional[str], email: Optional[str], message: Optional[str]) -> "ContactSubmission":
        # honeypot is taken verbatim; any content at all flags a bot
        return cls(
            name=name or "",
            email=(email or "").strip(),
            message=(message or "").strip(),
        )

    @property
    def is_bot(self) -> bool:
        return bool(self.name)


def validate_email(email: str) -> Optional[str]:
    if len(email) > MAX_EMAIL_LENGTH:
        return f"Email address must be shorter than {MAX_EMAIL_LENGTH} characters."
    if not email or not EMAIL_PATTERN.match(email):
        return "Please enter a valid email address."
    return None


def validate_message(message: str) -> Optional[str]:
    if len(message) > MAX_MESSAGE_LENGTH:
        return f"Message must be shorter than {MAX_MESSAGE_LENGTH} characters."
    if not message:
        return "Please enter a message."
    return None


def validate_submission(submission: ContactSubmission) -> Dict[str, str]:
    """
    Validate every field and collect all failures, keyed by field name.
    An empty dict means the submission is valid.
    """
    errors: Dict[str, str] = {}
    email_error = validate_email(submission.email)
    if email_error:
        errors["email"] = email_error
    message_error = validate_message(submission.message)
    if message_error:
        errors["message"] = message_error
    return errors


def build_subject(email: str) -> str:
    return f"Portfolio Contact: {email}"


def build_body(email: str, message: str) -> str:
    return (
        "New contact form submission from your portfolio:\n"
        "\n"
        f"From: {email}\n"
        "\n"
        "Message:\n"
        f"{message}\n"
        "\n"
        "---\n"
        "This email was sent from your portfolio contact form."
    )
