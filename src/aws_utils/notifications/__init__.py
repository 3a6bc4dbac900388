from aws_utils.notifications.publisher import NotificationPublisher

__all__ = ["NotificationPublisher"]
