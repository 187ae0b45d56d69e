"""Email (SMTP) provider."""

from healarr_notify.models.domain.notification import ProviderType
from healarr_notify.providers.base import BaseProvider, query_escape


class EmailProvider(BaseProvider):
    """SMTP email notifications.

    Parameters:
        - host: SMTP server host
        - port: SMTP port (default 465 with TLS, 587 otherwise)
        - username: SMTP user (optional)
        - password: SMTP password (optional)
        - from: Sender address
        - to: Recipient address(es)
        - tls: Use implicit TLS (smtps)
    """

    provider_type = ProviderType.EMAIL

    def build_url(self) -> str:
        host = self.require("host")
        tls = self.get_bool("tls")
        port = self.get_int("port") or (465 if tls else 587)

        auth = ""
        username = self.get("username")
        if username:
            auth = query_escape(username)
            password = self.get("password")
            if password:
                auth += ":" + query_escape(password)
            auth += "@"

        scheme = "smtps" if tls else "smtp"
        sender = query_escape(self.get("from"))
        recipients = query_escape(self.get("to"))
        return f"{scheme}://{auth}{host}:{port}/?from={sender}&to={recipients}"
