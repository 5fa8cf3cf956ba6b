"""HTML bodies for verification mails."""

from __future__ import annotations

from html import escape

_LAYOUT = """\
<div style="font-family: Arial, sans-serif; background: #f4f6f8; padding: 30px;">
  <div style="max-width: 500px; margin: auto; background: #fff; padding: 25px; border-radius: 10px;">
    <h2 style="text-align:center;">{greeting}</h2>
    <p>{lead}</p>
    <div style="text-align:center; margin:30px 0;">
      <a href="{link}" style="background:#4f46e5; color:#fff; padding:12px 25px; text-decoration:none; border-radius:5px;">Verify Email</a>
    </div>
    <p style="font-size:13px; color:#888;">Expires in {hours} hours.</p>
  </div>
</div>
"""


def _hours(ttl_seconds: float) -> int:
    return max(1, int(ttl_seconds // 3600))


def verification_subject(app_name: str, *, resend: bool = False) -> str:
    subject = f"Verify your {app_name} account"
    return f"Resend: {subject}" if resend else subject


def verification_body(
    *, name: str, link: str, ttl_seconds: float, resend: bool = False
) -> str:
    """Render the verification mail addressing ``name``.

    ``name`` and ``link`` are HTML-escaped.
    """
    if resend:
        greeting = f"Hi {escape(name)}"
        lead = "Here is a new verification link for your account:"
    else:
        greeting = f"Welcome, {escape(name)}"
        lead = "Please verify your email:"
    return _LAYOUT.format(
        greeting=greeting,
        lead=lead,
        link=escape(link, quote=True),
        hours=_hours(ttl_seconds),
    )
