"""
Email templates for account lifecycle notifications.
Each template renders to a (subject, html body) pair.
"""

import enum
from html import escape

THEME = {
    "primary": "#0f766e",
    "text_primary": "#0f172a",
    "text_muted": "#64748b",
    "background": "#f8fafc",
}


class NotificationTemplate(str, enum.Enum):
    ACTIVATION = "activation"
    PENDING_APPROVAL = "pending_approval"
    DOCTOR_REJECTED = "doctor_rejected"
    ADMIN_ACTIVATION = "admin_activation"
    ACCOUNT_DEACTIVATED = "account_deactivated"


def _base_template(title: str, body: str, cta_url: str | None = None, cta_label: str | None = None) -> str:
    cta_section = ""
    if cta_url and cta_label:
        cta_section = (
            f'<p style="margin:24px 0"><a href="{escape(cta_url, quote=True)}" '
            f'style="background:{THEME["primary"]};color:#ffffff;padding:12px 24px;'
            f'border-radius:6px;text-decoration:none">{escape(cta_label)}</a></p>'
        )
    return (
        f'<html><body style="background:{THEME["background"]};font-family:Arial,sans-serif">'
        f'<h2 style="color:{THEME["text_primary"]}">{escape(title)}</h2>'
        f"{body}{cta_section}"
        f'<p style="color:{THEME["text_muted"]};font-size:12px">CareSync clinic scheduling</p>'
        f"</body></html>"
    )


def activation_template(full_name: str, activation_link: str) -> tuple[str, str]:
    body = (
        f"<p>Hello {escape(full_name)},</p>"
        "<p>Your account is ready. Activate it within the next hour using the link below.</p>"
    )
    return "Activate your CareSync account", _base_template(
        "Activate your account", body, activation_link, "Activate account"
    )


def pending_approval_template(full_name: str) -> tuple[str, str]:
    body = (
        f"<p>Hello {escape(full_name)},</p>"
        "<p>Thanks for registering as a doctor. An administrator will review your "
        "registration and you will receive an activation link once it is approved.</p>"
    )
    return "Your doctor registration is under review", _base_template("Registration received", body)


def doctor_rejected_template(full_name: str, reason: str | None = None) -> tuple[str, str]:
    reason_text = escape(reason) if reason else "No reason was provided."
    body = (
        f"<p>Hello {escape(full_name)},</p>"
        "<p>We are sorry, your doctor registration was not approved.</p>"
        f"<p><strong>Reason:</strong> {reason_text}</p>"
    )
    return "Your doctor registration was not approved", _base_template("Registration rejected", body)


def admin_activation_template(full_name: str) -> tuple[str, str]:
    body = (
        f"<p>Hello {escape(full_name)},</p>"
        "<p>An administrator has activated your account. You can sign in again.</p>"
    )
    return "Your CareSync account was activated", _base_template("Account activated", body)


def account_deactivated_template(full_name: str) -> tuple[str, str]:
    body = (
        f"<p>Hello {escape(full_name)},</p>"
        "<p>An administrator has deactivated your account. Contact the clinic if you think this is a mistake.</p>"
    )
    return "Your CareSync account was deactivated", _base_template("Account deactivated", body)


TEMPLATES = {
    NotificationTemplate.ACTIVATION: activation_template,
    NotificationTemplate.PENDING_APPROVAL: pending_approval_template,
    NotificationTemplate.DOCTOR_REJECTED: doctor_rejected_template,
    NotificationTemplate.ADMIN_ACTIVATION: admin_activation_template,
    NotificationTemplate.ACCOUNT_DEACTIVATED: account_deactivated_template,
}


def render(template: NotificationTemplate, params: dict) -> tuple[str, str]:
    return TEMPLATES[template](**params)
