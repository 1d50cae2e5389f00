"""HTML and plain text renderings of the team invite emails."""

from html import escape

from fundteam.domain.value import TeamRole
from fundteam.domain.value.common import ValueObject

ROLE_DESCRIPTIONS: dict[TeamRole, str] = {
    TeamRole.MANAGER: "full access to manage the fund, investors, and settings",
    TeamRole.ACCOUNTANT: "access to K-1 management and investor tax data",
    TeamRole.ATTORNEY: "access to legal documents and signing status",
    TeamRole.INVESTOR: "access to view investments and fund updates",
}

_PARAGRAPH = '<p style="margin: 0 0 16px 0; font-size: 16px; color: #374151; line-height: 1.6;">{}</p>'


class RenderedEmail(ValueObject):
    """Subject with HTML and text bodies."""

    subject: str
    html: str
    text: str


def _layout(title: str, body: str, preheader: str, platform_name: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(platform_name)}</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f4f4f7;">
  <span style="display: none; max-height: 0; overflow: hidden;">{preheader}</span>
  <table role="presentation" width="100%" cellspacing="0" cellpadding="0" style="background-color: #f4f4f7;">
    <tr>
      <td align="center" style="padding: 40px 20px;">
        <table role="presentation" width="600" cellspacing="0" cellpadding="0" style="background-color: #ffffff; border-radius: 8px;">
          <tr><td style="padding: 32px 40px 0 40px;"><h1 style="margin: 0; font-size: 24px; color: #111827;">{title}</h1></td></tr>
          <tr><td style="padding: 24px 40px 32px 40px;">{body}</td></tr>
        </table>
        <p style="margin: 20px 0 0 0; color: #6b7280; font-size: 12px;">This is an automated message from {escape(platform_name)}. Please do not reply directly to this email.</p>
      </td>
    </tr>
  </table>
</body>
</html>
"""


def _button(text: str, url: str) -> str:
    return (
        '<table role="presentation" cellspacing="0" cellpadding="0" style="margin: 24px 0;">'
        '<tr><td align="center" bgcolor="#1e40af" style="border-radius: 6px;">'
        f'<a href="{escape(url)}" target="_blank" style="display: inline-block; padding: 14px 32px; '
        'font-size: 16px; font-weight: 600; color: #ffffff; text-decoration: none;">'
        f"{text}</a></td></tr></table>"
    )


def _notice(text: str) -> str:
    return (
        '<p style="margin: 0; padding: 12px 16px; background-color: #eff6ff; '
        f'border-radius: 6px; font-size: 14px; color: #1e3a8a;">{text}</p>'
    )


def role_description(role: TeamRole) -> str:
    """Describe what a role can do, for use after "you'll have"."""
    return ROLE_DESCRIPTIONS.get(role, f"access as a {role.value}")


def render_team_invite(
    fund_name: str,
    platform_name: str,
    role: TeamRole,
    inviter_name: str,
    inviter_email: str | None,
    accept_url: str,
    expires_in_days: int,
) -> RenderedEmail:
    """Render the email sent when an invite is created.

    Args:
        fund_name: Fund the recipient is invited to
        platform_name: Product name shown to the recipient
        role: Invited role
        inviter_name: Display name of the inviting manager
        inviter_email: Contact address of the inviting manager, if known
        accept_url: Acceptance link carrying the token
        expires_in_days: Validity window

    Returns:
        Rendered email
    """
    fund = escape(fund_name)
    platform = escape(platform_name)
    role_name = escape(role.value)
    inviter = escape(inviter_name)
    description = role_description(role)

    subject = f"You've been invited to join {fund_name} as a {role.value}"

    paragraphs = [
        _PARAGRAPH.format(
            f"<strong>{inviter}</strong> has invited you to join "
            f"<strong>{fund}</strong> on {platform} as a <strong>{role_name}</strong>."
        ),
        _PARAGRAPH.format(f"As a {role_name}, you'll have {escape(description)}."),
        _button("Accept Invitation", accept_url),
        _notice(f"This invitation will expire in {expires_in_days} days."),
    ]
    if inviter_email:
        contact = escape(inviter_email)
        paragraphs.append(
            _PARAGRAPH.format(
                f'If you have questions, contact {inviter} at <a href="mailto:{contact}">{contact}</a>.'
            )
        )

    text_lines = [
        f"{inviter_name} has invited you to join {fund_name} on {platform_name} as a {role.value}.",
        "",
        f"As a {role.value}, you'll have {description}.",
        "",
        f"Accept the invitation: {accept_url}",
        "",
        f"This invitation will expire in {expires_in_days} days.",
    ]
    if inviter_email:
        text_lines += ["", f"If you have questions, contact {inviter_name} at {inviter_email}."]

    return RenderedEmail(
        subject=subject,
        html=_layout(
            f"You're Invited to Join {fund}", "".join(paragraphs), escape(subject), platform_name
        ),
        text="\n".join(text_lines),
    )


def render_team_invite_reminder(
    fund_name: str,
    platform_name: str,
    role: TeamRole,
    inviter_name: str,
    accept_url: str,
    days_remaining: int,
) -> RenderedEmail:
    """Render the reminder sent on resend and on day 3 and day 5.

    Args:
        fund_name: Fund the recipient is invited to
        platform_name: Product name shown to the recipient
        role: Invited role
        inviter_name: Display name of the inviting manager
        accept_url: Acceptance link carrying the token
        days_remaining: Whole days left before the invite expires

    Returns:
        Rendered email
    """
    fund = escape(fund_name)
    platform = escape(platform_name)
    role_name = escape(role.value)
    inviter = escape(inviter_name)

    subject = f"Reminder: You've been invited to join {fund_name}"

    body = "".join(
        [
            _PARAGRAPH.format(
                f"This is a reminder that <strong>{inviter}</strong> has invited you to join "
                f"<strong>{fund}</strong> on {platform} as a <strong>{role_name}</strong>."
            ),
            _PARAGRAPH.format(
                "Your invitation is still pending. Click below to accept and create your account."
            ),
            _button("Accept Invitation", accept_url),
            _notice(f"This invitation will expire in {days_remaining} days."),
        ]
    )
    text = "\n".join(
        [
            f"This is a reminder that {inviter_name} has invited you to join "
            f"{fund_name} on {platform_name} as a {role.value}.",
            "",
            "Your invitation is still pending.",
            f"Accept the invitation: {accept_url}",
            "",
            f"This invitation will expire in {days_remaining} days.",
        ]
    )

    return RenderedEmail(
        subject=subject,
        html=_layout(f"Reminder: Join {fund}", body, escape(subject), platform_name),
        text=text,
    )
