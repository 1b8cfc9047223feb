"""Core business logic components.

This module exports the main business logic classes:
- Receiver: Decides what to do with one raw inbound email
- ReceiverWorker: Runs the receiver and sends rejection notices
- IncomingEmail: Reply-address scheme used to recover routing keys
- RoutingKeyResolver / Router: Routing key lookup and route matching
- AuthorizationGate: Acting user checks
- ReplyExtractor: Reply body extraction
"""

from mail_receiver.core.authorization import AuthorizationGate
from mail_receiver.core.incoming_email import IncomingEmail
from mail_receiver.core.receiver import Receiver, create_receiver
from mail_receiver.core.reply_extractor import ReplyExtractor
from mail_receiver.core.routing import Router, RoutingKeyResolver
from mail_receiver.core.worker import ReceiverWorker, rejection_for

__all__ = [
    "AuthorizationGate",
    "IncomingEmail",
    "Receiver",
    "ReceiverWorker",
    "ReplyExtractor",
    "Router",
    "RoutingKeyResolver",
    "create_receiver",
    "rejection_for",
]
