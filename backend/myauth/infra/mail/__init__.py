from .smtp_notifier import SMTPNotifier

__all__ = ["SMTPNotifier"]
