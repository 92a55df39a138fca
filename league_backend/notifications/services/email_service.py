import logging
import smtplib
from email.message import EmailMessage
from league_backend.core.config import settings

logger = logging.getLogger(__name__)

INVITE_SUBJECT = "🎉 You're Invited to Join Team Management"

INVITE_TEMPLATE = """\
<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
      <h1>🎉 You're Invited!</h1>
      <p>Hi,</p>
      <p>You've been invited to join our Team Management system as a <strong>{role}</strong>.</p>
      <p>Use the invite code below to create your account:</p>
      <p style="font-size: 18px; font-weight: bold; font-family: monospace;">{invite_code}</p>
      <p><a href="{signup_url}">Sign Up Now</a></p>
      <p>Or visit: <strong>{signup_url}</strong></p>
      <p style="color: #666; font-size: 14px;">If you have any questions, please contact the admin.</p>
    </div>
  </body>
</html>
"""


class EmailService:
    def __init__(self, smtp_factory=smtplib.SMTP_SSL):
        self.smtp_factory = smtp_factory

    def signup_url(self, invite_code: str) -> str:
        return f"{settings.APP_URL}/auth?inviteCode={invite_code}"

    def render_invite(self, invite_code: str, role: str) -> str:
        return INVITE_TEMPLATE.format(role=role, invite_code=invite_code, signup_url=self.signup_url(invite_code))

    def send(self, recipient: str, subject: str, html: str) -> bool:
        """Deliver an HTML email. Returns False instead of raising when delivery fails."""
        if not settings.SMTP_USER or not settings.SMTP_PASSWORD:
            logger.warning("[WARN] SMTP credentials missing; email not sent")
            return False

        message = EmailMessage()
        message["From"] = f'"Team Management" <{settings.SMTP_USER}>'
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(html, subtype="html")

        try:
            with self.smtp_factory(settings.SMTP_HOST, settings.SMTP_PORT) as smtp:
                smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"❌ Error sending email to {recipient}: {e}")
            return False

        logger.info(f"📨 Sent '{subject}' to {recipient}")
        return True

    def send_invite(self, recipient: str, invite_code: str, role: str) -> bool:
        return self.send(recipient, INVITE_SUBJECT, self.render_invite(invite_code, role))
