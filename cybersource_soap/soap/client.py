import logging
from typing import Any, Mapping, Optional

import requests
from zeep import Client, Settings
from zeep.cache import InMemoryCache
from zeep.plugins import HistoryPlugin
from zeep.transports import Transport

from ..config import CyberSourceConfig

logger = logging.getLogger(__name__)

SERVICE_NAME = "TransactionProcessor"
PORT_NAME = "portXML"


class SoapClient:
    """Dispatches ``runTransaction`` calls, one zeep client per request.

    The WSSE object differs per call (credentials can rotate between
    transactions), so zeep clients are not shared; the WSDL is cached by the
    transport.
    """

    def __init__(self, cfg: CyberSourceConfig, session: requests.Session, service=None):
        self.cfg = cfg
        self.service = service
        self._history = HistoryPlugin() if service is None else None
        self._transport = None
        self._wsdl_url = None

        if service is None:
            self._wsdl_url = cfg.local_wsdl_url or cfg.wsdl_url
            self._transport = Transport(session=session, timeout=cfg.timeout, cache=InMemoryCache())
            logger.info("Initialized CyberSource SOAP client @ %s", self._wsdl_url)

    @property
    def history(self) -> Optional[HistoryPlugin]:
        return self._history

    def create_client(self, wsse) -> Client:
        settings = Settings(strict=False, xml_huge_tree=True)
        return Client(
            self._wsdl_url,
            transport=self._transport,
            plugins=[self._history],
            wsse=wsse,
            settings=settings,
        )

    def run_transaction(self, request: Mapping[str, Any], wsse) -> Any:
        if self.service is not None:
            return self.service.runTransaction(**request)
        client = self.create_client(wsse)
        proxy = client.bind(SERVICE_NAME, PORT_NAME)
        logger.debug("Calling runTransaction for %s", request.get("merchantReferenceCode"))
        return proxy.runTransaction(**request)
