"""
Outbound email notifications.

The dispatcher renders CareBridge's HTML templates and hands them to a
MailTransport. Sending is best effort: a failed send is logged and reported
in the returned DispatchResult, never raised to the caller, so the domain
operation that triggered it has already been committed and stays committed.
"""

import html
import logging
import smtplib
from dataclasses import dataclass
from datetime import datetime
from email.message import EmailMessage
from email.utils import formataddr
from typing import Callable, Iterable, Optional, Protocol

from fastapi import BackgroundTasks

from app.core.config import settings
from app.models.enums import RecruiterType

logger = logging.getLogger("notifications")

RECRUITER_TYPE_TEXT = {
    RecruiterType.COMPANY: "Company",
    RecruiterType.GROUP: "Group",
    RecruiterType.INDIVIDUAL: "Individual Recruiter",
}


@dataclass
class DispatchResult:
    ok: bool
    recipient: str
    error: Optional[str] = None


# ============== Transports ==============


class MailTransport(Protocol):
    def send_mail(self, to: str, subject: str, html_body: str) -> None: ...


class SMTPTransport:
    """Sends mail over SMTP (implicit SSL or STARTTLS)."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        sender: str,
        use_ssl: bool = True,
        timeout: int = 10,
        sender_name: str = "CareBridge",
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender or user
        self.use_ssl = use_ssl
        self.timeout = timeout
        self.sender_name = sender_name

    def _build_message(self, to: str, subject: str, html_body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = formataddr((self.sender_name, self.sender))
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html_body, subtype="html")
        return msg

    def send_mail(self, to: str, subject: str, html_body: str) -> None:
        msg = self._build_message(to, subject, html_body)
        if self.use_ssl:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as server:
                if self.user:
                    server.login(self.user, self.password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                if self.user:
                    server.login(self.user, self.password)
                server.send_message(msg)


class NullTransport:
    """Used when mail is disabled: logs what would have been sent."""

    def send_mail(self, to: str, subject: str, html_body: str) -> None:
        logger.info("Mail disabled, skipping '%s' to %s", subject, to)


class BackgroundTransport:
    """
    Queues each send on FastAPI BackgroundTasks so it runs after the
    response has been returned. Errors raised by the inner transport are
    logged inside the task.
    """

    def __init__(self, background_tasks: BackgroundTasks, inner: MailTransport):
        self.background_tasks = background_tasks
        self.inner = inner

    def send_mail(self, to: str, subject: str, html_body: str) -> None:
        self.background_tasks.add_task(self._deliver, to, subject, html_body)

    def _deliver(self, to: str, subject: str, html_body: str) -> None:
        try:
            self.inner.send_mail(to, subject, html_body)
            logger.info("Email sent to %s", to)
        except Exception as exc:
            logger.error("Failed to send email to %s: %s", to, exc)


# ============== Templates ==============


def _e(value) -> str:
    return html.escape(str(value)) if value is not None else ""


def _button(href: str, label: str, color: str = "#4a6bff") -> str:
    return (
        f'<a href="{_e(href)}" style="background-color: {color}; color: white; '
        f'padding: 10px 20px; text-decoration: none; border-radius: 5px; '
        f'display: inline-block; margin: 5px;">{_e(label)}</a>'
    )


def _layout(body: str, sign_off: str = "Best regards,") -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f"{body}"
        f"<p>{_e(sign_off)}<br/>The CareBridge Team</p>"
        "</div>"
    )


def _panel(rows: str, background: str = "#f8f9fa") -> str:
    return (
        f'<div style="background-color: {background}; padding: 20px; '
        f'border-radius: 8px; margin: 20px 0;">{rows}</div>'
    )


def _field(label: str, value) -> str:
    return f"<p><strong>{_e(label)}:</strong> {_e(value)}</p>"


def _quote(value: str) -> str:
    return (
        '<div style="background-color: white; padding: 15px; border-radius: 5px; '
        f'font-style: italic;">"{_e(value)}"</div>'
    )


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d") if value else "N/A"


def _format_time(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M") if value else ""


class NotificationDispatcher:
    """Renders and sends every CareBridge email."""

    def __init__(self, transport: MailTransport, frontend_url: str, admin_dashboard_url: str):
        self.transport = transport
        self.frontend_url = frontend_url.rstrip("/")
        self.admin_dashboard_url = admin_dashboard_url.rstrip("/")

    def _send(self, to: str, subject: str, html_body: str) -> DispatchResult:
        try:
            self.transport.send_mail(to, subject, html_body)
        except Exception as exc:
            logger.error("Failed to send '%s' to %s: %s", subject, to, exc)
            return DispatchResult(ok=False, recipient=to, error=str(exc))
        logger.info("Dispatched '%s' to %s", subject, to)
        return DispatchResult(ok=True, recipient=to)

    # ---- welcome mails ----

    def send_admin_welcome(self, email: str, name: str) -> DispatchResult:
        body = (
            f'<h1 style="color: #4a6bff;">Welcome Admin {_e(name)}!</h1>'
            "<p>Congratulations! You have been granted administrative access "
            "to the CareBridge platform.</p>"
            + _panel(
                "<p><strong>Your admin responsibilities include:</strong></p>"
                "<p>Reviewing recruiter and worker profiles<br/>"
                "Approving connection requests<br/>"
                "Keeping job categories up to date</p>"
            )
            + f'<div style="text-align: center;">{_button(self.frontend_url + "/dashboard/admin", "Go to Admin Dashboard")}</div>'
        )
        return self._send(email, "Welcome to CareBridge - Admin Access Granted!", _layout(body))

    def send_recruiter_welcome(
        self, email: str, name: str, recruiter_type: RecruiterType = RecruiterType.INDIVIDUAL
    ) -> DispatchResult:
        type_text = RECRUITER_TYPE_TEXT.get(recruiter_type, "Recruiter")
        body = (
            f'<h1 style="color: #4a6bff;">Welcome {_e(name)}!</h1>'
            f"<p>Thank you for joining CareBridge as a <strong>{_e(type_text)}</strong>. "
            "You're now part of a platform that connects you with qualified workers "
            "across various industries.</p>"
            + _panel(
                "<p><strong>Next Steps:</strong></p>"
                "<p>1. Complete your recruiter profile<br/>"
                "2. Post your first job<br/>"
                "3. Review applications from workers</p>"
            )
            + '<div style="text-align: center;">'
            + _button(self.frontend_url + "/dashboard/recruiter", "Go to Dashboard")
            + _button(self.frontend_url + "/profile", "Complete Profile", "#28a745")
            + "</div>"
        )
        return self._send(
            email,
            "Welcome to CareBridge - Start Finding Top Talent!",
            _layout(body, "Best of luck with your hiring!"),
        )

    def send_worker_welcome(self, email: str, name: str) -> DispatchResult:
        body = (
            f'<h1 style="color: #4a6bff;">Welcome {_e(name)}!</h1>'
            "<p>Congratulations on joining CareBridge! You're now part of a community "
            "where skilled professionals like you connect with great job opportunities.</p>"
            + _panel(
                "<p><strong>Pro Tips for Success:</strong></p>"
                "<p>Complete your profile with skills and experience<br/>"
                "Apply to jobs that match your expertise<br/>"
                "Keep your availability up to date</p>"
            )
            + '<div style="text-align: center;">'
            + _button(self.frontend_url + "/jobs", "Browse Jobs")
            + _button(self.frontend_url + "/profile", "Complete Profile", "#28a745")
            + "</div>"
        )
        return self._send(
            email,
            "Welcome to CareBridge - Your Next Opportunity Awaits!",
            _layout(body, "Best of luck in your job search!"),
        )

    def send_subscription_welcome(self, email: str, name: str = "") -> DispatchResult:
        greeting = f"Thank You {_e(name)}!" if name else "Thank You!"
        body = (
            f'<h1 style="color: #4a6bff;">{greeting}</h1>'
            "<p>You've successfully subscribed to CareBridge updates. We'll keep you "
            "informed about the latest features, job opportunities, and platform "
            "improvements.</p>"
            + '<div style="text-align: center;">'
            + _button(self.frontend_url + "/register", "Create an Account")
            + _button(self.frontend_url + "/jobs", "Browse Jobs", "#28a745")
            + "</div>"
            + '<p style="font-size: 12px; color: #666;">You can unsubscribe at any time '
            f'<a href="{_e(self.frontend_url + "/unsubscribe")}" style="color: #4a6bff;">here</a>.</p>'
        )
        return self._send(
            email,
            "Thank You for Subscribing to CareBridge Updates!",
            _layout(body, "Stay tuned for exciting updates!"),
        )

    # ---- job flow ----

    def send_job_application_received(
        self,
        recruiter_email: str,
        recruiter_name: str,
        job_title: str,
        worker_name: str,
        application_message: Optional[str] = None,
    ) -> DispatchResult:
        details = _field("Job Title", job_title) + _field("Applicant", worker_name)
        if application_message:
            details += "<p><strong>Message:</strong></p>" + _quote(application_message)
        body = (
            '<h1 style="color: #4a6bff;">New Job Application Received!</h1>'
            f"<p>Hello {_e(recruiter_name)},</p>"
            "<p>Great news! You have received a new application for your job posting.</p>"
            + _panel(details)
            + f'<div style="text-align: center;">{_button(self.frontend_url + "/dashboard/recruiter", "Review Application")}</div>'
        )
        return self._send(recruiter_email, f"New Application: {job_title}", _layout(body, "Happy hiring!"))

    def send_work_assignment_confirmed(
        self,
        worker_email: str,
        worker_name: str,
        job_title: str,
        recruiter_name: str,
        work_date: Optional[datetime] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> DispatchResult:
        details = (
            _field("Job", job_title)
            + _field("Recruiter", recruiter_name)
            + _field("Date", _format_date(work_date))
        )
        if start_time:
            details += _field("Start Time", _format_time(start_time))
        if end_time:
            details += _field("End Time", _format_time(end_time))
        body = (
            '<h1 style="color: #28a745;">Work Assignment Confirmed!</h1>'
            f"<p>Hello {_e(worker_name)},</p>"
            "<p>Congratulations! You have been assigned to a new work opportunity.</p>"
            + _panel(details, "#e8f5e9")
            + f'<div style="text-align: center;">{_button(self.frontend_url + "/dashboard/worker", "View Assignment", "#28a745")}</div>'
        )
        return self._send(
            worker_email, f"Work Assignment Confirmed: {job_title}", _layout(body, "Best of luck!")
        )

    # ---- connection requests ----

    def notify_admins_new_connection_request(
        self, admin_emails: Iterable[str], request
    ) -> list[DispatchResult]:
        """Tell every admin a recruiter asked to be introduced to a worker."""
        recruiter, worker = request.recruiter, request.worker
        recruiter_rows = (
            _field("Name", recruiter.user.full_name)
            + _field("Company", recruiter.company_name or "Not specified")
            + _field("Email", recruiter.user.email)
            + _field("Location", recruiter.location or "Not specified")
        )
        if recruiter.website:
            recruiter_rows += _field("Website", recruiter.website)
        worker_rows = (
            _field("Name", worker.user.full_name)
            + _field("Email", worker.user.email)
            + _field("Location", worker.location or "Not specified")
            + _field("Skills", worker.skills or "Not specified")
            + _field("Experience", worker.experience or "Not specified")
        )
        body = (
            '<h1 style="color: #4a6bff;">New Connection Request</h1>'
            "<h2>Recruiter</h2>" + _panel(recruiter_rows)
            + "<h2>Worker</h2>" + _panel(worker_rows)
        )
        if request.message:
            body += "<p><strong>Message from recruiter:</strong></p>" + _quote(request.message)
        body += (
            f'<div style="text-align: center;">'
            f'{_button(self.admin_dashboard_url + "/connections/pending", "Review Request")}</div>'
            '<p style="font-size: 12px; color: #666;">This is an automated notification. '
            "Please do not reply directly to this email.</p>"
        )
        subject = (
            f"New Connection Request: {recruiter.user.full_name} → {worker.user.full_name}"
        )
        html_body = _layout(body)
        return [self._send(email, subject, html_body) for email in admin_emails]

    def send_connection_approved(self, request) -> list[DispatchResult]:
        """Mail both the recruiter and the worker of an approved request."""
        recruiter, worker = request.recruiter, request.worker
        company = recruiter.company_name or "a company"

        recruiter_body = (
            '<h1 style="color: #4a6bff;">Connection Approved!</h1>'
            f"<p>Hello {_e(recruiter.user.first_name)},</p>"
            f"<p>Your connection request to <strong>{_e(worker.user.full_name)}</strong> "
            "has been approved by the admin.</p>"
            + _panel(
                _field("Email", worker.user.email)
                + _field("Phone", worker.user.phone or "Not provided")
                + _field("Location", worker.location or "Not specified")
            )
        )
        if request.message:
            recruiter_body += "<p><strong>Your original message:</strong></p>" + _quote(request.message)
        recruiter_body += f'<div style="text-align: center;">{_button(self.frontend_url + "/", "Go to CareBridge")}</div>'

        worker_body = (
            '<h1 style="color: #4a6bff;">New Connection Approved!</h1>'
            f"<p>Hello {_e(worker.user.first_name)},</p>"
            f"<p>You have been connected with <strong>{_e(recruiter.user.full_name)}</strong> "
            f"from <strong>{_e(company)}</strong>.</p>"
            + _panel(
                _field("Email", recruiter.user.email)
                + _field("Location", recruiter.location or "Not specified")
            )
        )
        if request.message:
            worker_body += "<p><strong>Recruiter's message:</strong></p>" + _quote(request.message)
        worker_body += (
            f'<div style="text-align: center;">'
            f'{_button(self.frontend_url + "/dashboard/worker/connections", "View Connections")}</div>'
        )

        return [
            self._send(
                recruiter.user.email,
                f"Connection Approved: {worker.user.full_name}",
                _layout(recruiter_body),
            ),
            self._send(
                worker.user.email,
                f"New Connection: {recruiter.user.full_name} from {company}",
                _layout(worker_body),
            ),
        ]

    def send_connection_rejected(self, request) -> DispatchResult:
        recruiter, worker = request.recruiter, request.worker
        body = (
            '<h1 style="color: #4a6bff;">Connection Not Approved</h1>'
            f"<p>Hello {_e(recruiter.user.first_name)},</p>"
            "<p>We regret to inform you that your connection request to "
            f"<strong>{_e(worker.user.full_name)}</strong> was not approved by the admin.</p>"
        )
        if request.admin_notes:
            body += "<p><strong>Admin notes:</strong></p>" + _quote(request.admin_notes)
        body += f'<div style="text-align: center;">{_button(self.frontend_url + "/", "Browse Other Workers")}</div>'
        return self._send(recruiter.user.email, "Connection Request Not Approved", _layout(body))


def notify_safely(step: Callable[..., object], *args, **kwargs) -> None:
    """
    Run a notification step after its domain write has been committed.

    Anything the step raises, template rendering included, is logged and
    swallowed so the committed operation still succeeds.
    """
    try:
        step(*args, **kwargs)
    except Exception:
        logger.exception("Notification step %s failed", getattr(step, "__name__", step))


# ============== Dependencies ==============


def build_transport() -> MailTransport:
    if not settings.MAIL_ENABLED:
        return NullTransport()
    return SMTPTransport(
        host=settings.MAIL_HOST,
        port=settings.MAIL_PORT,
        user=settings.MAIL_USER,
        password=settings.MAIL_PASSWORD,
        sender=settings.MAIL_FROM,
        use_ssl=settings.MAIL_USE_SSL,
        timeout=settings.MAIL_TIMEOUT_SECONDS,
        sender_name=settings.APP_NAME,
    )


def get_notifier(background_tasks: BackgroundTasks) -> NotificationDispatcher:
    """FastAPI dependency: a dispatcher whose sends run after the response."""
    return NotificationDispatcher(
        BackgroundTransport(background_tasks, build_transport()),
        settings.FRONTEND_URL,
        settings.ADMIN_DASHBOARD_URL,
    )
