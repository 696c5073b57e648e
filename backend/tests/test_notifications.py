import logging

from fastapi import BackgroundTasks

from conftest import RecordingTransport

from app.models import RecruiterType
from app.services.notifications import (
    BackgroundTransport,
    NotificationDispatcher,
    NullTransport,
    build_transport,
    notify_safely,
)


def dispatcher(transport):
    return NotificationDispatcher(transport, "http://frontend.test/", "http://admin.test")


def test_worker_welcome(transport):
    result = dispatcher(transport).send_worker_welcome("jane@example.com", "Jane")

    assert result.ok is True
    assert result.recipient == "jane@example.com"
    mail = transport.sent[0]
    assert mail.subject == "Welcome to CareBridge - Your Next Opportunity Awaits!"
    assert "Welcome Jane" in mail.html_body
    assert "The CareBridge Team" in mail.html_body


def test_recruiter_welcome_mentions_type(transport):
    dispatcher(transport).send_recruiter_welcome("a@example.com", "Ann", RecruiterType.GROUP)
    assert "<strong>Group</strong>" in transport.sent[0].html_body


def test_user_values_are_escaped(transport):
    dispatcher(transport).send_job_application_received(
        "r@example.com",
        "Rita",
        "Nanny",
        "<script>alert(1)</script>",
        "Tom & Jerry",
    )

    body = transport.sent[0].html_body
    assert "<script>" not in body
    assert "&lt;script&gt;" in body
    assert "Tom &amp; Jerry" in body


def test_links_use_configured_frontend(transport):
    dispatcher(transport).send_job_application_received("r@example.com", "Rita", "Nanny", "Tom")
    assert 'href="http://frontend.test/dashboard/recruiter"' in transport.sent[0].html_body


def test_application_without_message_has_no_quote(transport):
    dispatcher(transport).send_job_application_received("r@example.com", "Rita", "Nanny", "Tom")
    assert "Message:" not in transport.sent[0].html_body


def test_failed_send_is_reported_not_raised(caplog):
    failing = RecordingTransport(fail=True)

    with caplog.at_level(logging.ERROR, logger="notifications"):
        result = dispatcher(failing).send_admin_welcome("boss@example.com", "Boss")

    assert result.ok is False
    assert result.error == "SMTP server unavailable"
    assert "Failed to send" in caplog.text


def test_subscription_greeting(transport):
    notifier = dispatcher(transport)
    notifier.send_subscription_welcome("a@example.com", "Ann")
    notifier.send_subscription_welcome("b@example.com")

    assert "Thank You Ann!" in transport.sent[0].html_body
    assert "Thank You!" in transport.sent[1].html_body
    assert transport.sent[1].subject == "Thank You for Subscribing to CareBridge Updates!"


def test_background_transport_defers_delivery():
    inner = RecordingTransport()
    tasks = BackgroundTasks()
    background = BackgroundTransport(tasks, inner)

    background.send_mail("a@example.com", "Hello", "<p>Hi</p>")

    assert inner.sent == []
    assert len(tasks.tasks) == 1

    task = tasks.tasks[0]
    task.func(*task.args, **task.kwargs)
    assert inner.sent[0].subject == "Hello"


def test_background_transport_logs_failures(caplog):
    tasks = BackgroundTasks()
    background = BackgroundTransport(tasks, RecordingTransport(fail=True))
    background.send_mail("a@example.com", "Hello", "<p>Hi</p>")

    task = tasks.tasks[0]
    with caplog.at_level(logging.ERROR, logger="notifications"):
        task.func(*task.args, **task.kwargs)

    assert "Failed to send email to a@example.com" in caplog.text


def test_mail_disabled_uses_null_transport():
    assert isinstance(build_transport(), NullTransport)


def test_subscribe_endpoint(client, transport):
    response = client.post(
        "/api/v1/notifications/subscribe", json={"email": "Fan@Example.com", "name": "Fan"}
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Subscription successful"
    assert response.json()["data"] == {"email": "fan@example.com"}
    assert transport.sent[0].to == "fan@example.com"


def test_subscribe_rejects_bad_email(client, transport):
    response = client.post("/api/v1/notifications/subscribe", json={"email": "not-an-email"})

    assert response.status_code == 400
    assert transport.sent == []


def test_notify_safely_logs_and_continues(caplog):
    def render_welcome(email):
        raise KeyError(email)

    with caplog.at_level(logging.ERROR, logger="notifications"):
        notify_safely(render_welcome, "ann@example.com")

    assert "Notification step render_welcome failed" in caplog.text


def test_notify_safely_passes_arguments(transport):
    notify_safely(dispatcher(transport).send_admin_welcome, "boss@example.com", "Boss")
    assert [mail.to for mail in transport.sent] == ["boss@example.com"]
