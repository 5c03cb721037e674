"""Notification relay — WebSocket fan-out of order events to subscribed clients."""
