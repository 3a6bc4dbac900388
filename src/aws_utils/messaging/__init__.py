from aws_utils.messaging.channel import EndpointState, MessageChannel, with_queue_url

__all__ = ["EndpointState", "MessageChannel", "with_queue_url"]
