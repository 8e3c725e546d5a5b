"""HTML bodies for account emails."""

from html import escape

FORGOT_PASSWORD_SUBJECT = "Reset Your Password and Get Back Into Your Notorite Account"
OTP_SUBJECT = "Verify your email address for Notorite"


def forgot_password_email(first_name: str, reset_url: str) -> str:
    name = escape(first_name)
    url = escape(reset_url, quote=True)
    return f"""\
<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; color: #222;">
    <h2>Hi {name},</h2>
    <p>We received a request to reset the password for your Notorite account.</p>
    <p>
      <a href="{url}"
         style="display: inline-block; padding: 10px 18px; background: #4f46e5;
                color: #fff; text-decoration: none; border-radius: 6px;">
        Reset password
      </a>
    </p>
    <p>If the button does not work, copy this link into your browser:<br>{url}</p>
    <p>If you did not ask for a reset you can ignore this email.</p>
  </body>
</html>
"""


def otp_email(email: str, otp: str) -> str:
    address = escape(email)
    return f"""\
<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; color: #222;">
    <h2>Verify your email</h2>
    <p>Use the code below to confirm that {address} belongs to you.</p>
    <p style="font-size: 28px; letter-spacing: 6px; font-weight: bold;">{otp}</p>
    <p>If you did not request this code you can ignore this email.</p>
  </body>
</html>
"""
