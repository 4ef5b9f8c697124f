"""XML-RPC transport backed by a requests session.

The stock xmlrpc.client transport has no per-request timeout and reports
network problems as bare socket errors. This transport sends the marshalled
request with requests instead, so calls honour the configured timeout and
connection failures surface as ServiceUnreachableError.
"""

import logging
import xmlrpc.client
from typing import Optional

import requests
from requests.exceptions import Timeout, ConnectTimeout, ReadTimeout, ConnectionError

from .errors import ServiceUnreachableError

logger = logging.getLogger(__name__)


class RequestsTransport(xmlrpc.client.Transport):
    """Transport for xmlrpc.client.ServerProxy that posts through requests.

    Example:
        >>> transport = RequestsTransport(scheme="https", timeout=30)
        >>> proxy = xmlrpc.client.ServerProxy(
        ...     "https://wiki.example.org/rpc/xmlrpc", transport=transport)
    """

    def __init__(
        self,
        scheme: str = "https",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the transport.

        Args:
            scheme: URL scheme of the endpoint ("http" or "https")
            timeout: Seconds to wait for connect and read
            session: Optional session to reuse (a new one is created otherwise)
        """
        super().__init__()
        self.scheme = scheme
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(self, host, handler, request_body, verbose=False):
        url = f"{self.scheme}://{host}{handler}"
        logger.debug(f"POST {handler} ({len(request_body)} bytes)")

        try:
            response = self.session.post(
                url,
                data=request_body,
                headers={
                    "Content-Type": "text/xml",
                    "User-Agent": self.user_agent,
                },
                timeout=self.timeout,
            )
        except (Timeout, ConnectTimeout, ReadTimeout, ConnectionError) as e:
            logger.debug(f"Transport failure for {handler}: {type(e).__name__}")
            raise ServiceUnreachableError(endpoint=f"{self.scheme}://{host}") from e

        if response.status_code != 200:
            raise xmlrpc.client.ProtocolError(
                url,
                response.status_code,
                response.reason,
                dict(response.headers),
            )

        parser, unmarshaller = self.getparser()
        parser.feed(response.content)
        parser.close()
        return unmarshaller.close()

    def close(self):
        super().close()
        self.session.close()
