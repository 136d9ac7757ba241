"""
Stock Panel - Email Service

Sends account emails via SMTP (STARTTLS, port 587 by default):
- Password reset links
- Configuration test messages
"""
import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional
from loguru import logger
from jinja2 import Template

from stock_panel.config import Settings


# Email Templates
TEMPLATES = {
    "password_reset": """
<!DOCTYPE html>
<html>
<head>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 0; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: #1e3a8a; color: white; padding: 24px; text-align: center; border-radius: 8px 8px 0 0; }
        .content { background: #f9fafb; padding: 30px; border: 1px solid #e5e7eb; }
        .button { display: inline-block; background: #2563eb; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; font-weight: bold; }
        .footer { text-align: center; padding: 20px; color: #6b7280; font-size: 12px; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h2>Password Reset Request</h2>
        </div>
        <div class="content">
            <p>You have requested to reset your password for your {{ app_name }} account.</p>
            <p>Click the link below to reset your password:</p>
            <p><a href="{{ reset_link }}" class="button">Reset Password</a></p>
            <p>This link will expire in {{ expires_minutes }} minutes.</p>
            <p>If you didn't request this password reset, please ignore this email.</p>
        </div>
        <div class="footer">
            <p>Best regards,<br>{{ app_name }} Team</p>
        </div>
    </div>
</body>
</html>
""",

    "test_email": """
<!DOCTYPE html>
<html>
<body>
    <h2>Test Email</h2>
    <p>This is a test email to verify your email configuration is working correctly.</p>
    <p>If you received this email, your email service is properly configured!</p>
    <br>
    <p>Best regards,<br>{{ app_name }} Team</p>
</body>
</html>
""",
}


class EmailService:
    """Async email service for account notifications."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def from_email(self) -> str:
        return self.settings.SMTP_FROM_EMAIL or self.settings.SMTP_USER

    def is_configured(self) -> bool:
        """Check if SMTP credentials are present."""
        return bool(self.settings.SMTP_USER and self.settings.SMTP_PASSWORD)

    async def _get_connection(self) -> aiosmtplib.SMTP:
        """Open and authenticate an SMTP connection."""
        smtp = aiosmtplib.SMTP(
            hostname=self.settings.SMTP_HOST,
            port=self.settings.SMTP_PORT,
            use_tls=False,  # We'll use STARTTLS
            start_tls=self.settings.SMTP_USE_TLS,
        )
        await smtp.connect()
        await smtp.login(self.settings.SMTP_USER, self.settings.SMTP_PASSWORD)
        return smtp

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """
        Send an email.

        Args:
            to_email: Recipient email address
            subject: Email subject
            html_content: HTML body
            text_content: Plain text body (optional)

        Returns:
            True if sent successfully, False otherwise
        """
        if not self.is_configured():
            logger.warning("Email service not configured, skipping email send")
            return False

        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = f"{self.settings.SMTP_FROM_NAME} <{self.from_email}>"
            msg["To"] = to_email

            if text_content:
                msg.attach(MIMEText(text_content, "plain"))
            msg.attach(MIMEText(html_content, "html"))

            smtp = await self._get_connection()
            try:
                await smtp.send_message(msg)
            finally:
                await smtp.quit()

            logger.info(f"Email sent successfully to {to_email}: {subject}")
            return True

        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False

    async def send_password_reset_email(self, to_email: str, reset_link: str) -> bool:
        """Send the password reset link."""
        template = Template(TEMPLATES["password_reset"])
        html = template.render(
            app_name=self.settings.APP_NAME,
            reset_link=reset_link,
            expires_minutes=self.settings.RESET_TOKEN_EXPIRE_MINUTES,
        )

        subject = f"Password Reset Request - {self.settings.APP_NAME}"
        return await self.send_email(to_email, subject, html)

    async def send_test_email(self, to_email: str) -> bool:
        """Send a message confirming SMTP settings work."""
        template = Template(TEMPLATES["test_email"])
        html = template.render(app_name=self.settings.APP_NAME)

        subject = f"Test Email - {self.settings.APP_NAME}"
        return await self.send_email(to_email, subject, html)
