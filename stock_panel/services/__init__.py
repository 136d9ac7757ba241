"""
Stock Panel - External Collaborators
"""
from stock_panel.services.email_service import EmailService
from stock_panel.services.alert_forwarder import KiteAlertForwarder, build_alert_payload

__all__ = ["EmailService", "KiteAlertForwarder", "build_alert_payload"]
