from portfolio.lib.contact_form import (
    MAX_EMAIL_LENGTH,
    MAX_MESSAGE_LENGTH,
    ContactSubmission,
    build_body,
    build_subject,
    validate_submission,
)


def _sub(email="me@example.com", message="Hello there", name=""):
    return ContactSubmission.from_form(name, email, message)


def test_valid_submission_has_no_errors():
    assert validate_submission(_sub()) == {}


def test_malformed_emails_are_rejected():
    for email in ["", "plainaddress", "a@b.co", "me@example", "me@example.c", "@example.com"]:
        errors = validate_submission(_sub(email=email))
        assert errors.get("email") == "Please enter a valid email address.", email


def test_overlong_email_gets_length_message_even_if_shape_matches():
    email = "a" * MAX_EMAIL_LENGTH + "@example.com"
    errors = validate_submission(_sub(email=email))
    assert errors["email"] == "Email address must be shorter than 512 characters."


def test_message_length_boundary():
    assert validate_submission(_sub(message="x" * MAX_MESSAGE_LENGTH)) == {}
    errors = validate_submission(_sub(message="x" * (MAX_MESSAGE_LENGTH + 1)))
    assert errors["message"] == "Message must be shorter than 4096 characters."


def test_blank_message_after_trimming():
    errors = validate_submission(_sub(message="   \n  "))
    assert errors == {"message": "Please enter a message."}


def test_all_field_errors_reported_together():
    errors = validate_submission(_sub(email="nope", message=""))
    assert set(errors) == {"email", "message"}


def test_from_form_trims_fields_but_not_honeypot():
    sub = ContactSubmission.from_form(" ", "  me@example.com ", "\nhi\n")
    assert sub.email == "me@example.com"
    assert sub.message == "hi"
    assert sub.is_bot is True
    assert ContactSubmission.from_form(None, None, None).is_bot is False


def test_subject_and_body_include_submitter():
    assert build_subject("me@example.com") == "Portfolio Contact: me@example.com"
    body = build_body("me@example.com", "Line one\nLine two")
    assert body.startswith("New contact form submission from your portfolio:")
    assert "From: me@example.com" in body
    assert "Message:\nLine one\nLine two\n" in body
    assert body.endswith("This email was sent from your portfolio contact form.")
