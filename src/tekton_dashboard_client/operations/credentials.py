"""Operations for credentials (secrets) and the service accounts that use them."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from ..addressing import NamespaceLike
from ..api import DashboardAPI
from ..config import DashboardContext

_LOG = logging.getLogger(__name__)


class CredentialOperations:
    """Manage secrets and their association with service accounts."""

    def __init__(self, api: DashboardAPI, context: DashboardContext) -> None:
        self.api = api
        self.context = context

    def _namespace(self, namespace: NamespaceLike) -> NamespaceLike:
        return namespace if namespace is not None else self.context.namespace

    def _secret_url(self, name: str = "", namespace: NamespaceLike = None) -> str:
        return self.api.resolver.build_kube_core_url("secrets", name=name, namespace=self._namespace(namespace))

    def list_credentials(self, namespace: NamespaceLike = None) -> List[Dict[str, Any]]:
        return self.api.list(self._secret_url(namespace=namespace))

    def get_all_credentials(self, namespace: NamespaceLike = None) -> Dict[str, Any]:
        """Return the raw SecretList envelope, without unwrapping ``items``."""

        return self.api.get(self._secret_url(namespace=namespace))

    def get_credential(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        return self.api.get(self._secret_url(name, namespace))

    def create_credential(self, credential: Dict[str, Any], namespace: NamespaceLike = None) -> Any:
        _LOG.info("Creating credential %s", credential.get("id"))
        return self.api.post(self._secret_url(namespace=namespace), dict(credential))

    def update_credential(self, credential: Dict[str, Any], namespace: NamespaceLike = None) -> Any:
        """Replace the secret named by ``credential["id"]``."""

        credential_id = credential["id"]
        _LOG.info("Updating credential %s", credential_id)
        return self.api.put(self._secret_url(credential_id, namespace), dict(credential))

    def delete_credential(self, credential_id: str, namespace: NamespaceLike = None) -> Any:
        _LOG.info("Deleting credential %s", credential_id)
        return self.api.delete(self._secret_url(credential_id, namespace))

    def _service_account_url(self, name: str = "", namespace: NamespaceLike = None) -> str:
        return self.api.resolver.build_kube_core_url(
            "serviceaccounts", name=name, namespace=self._namespace(namespace)
        )

    def get_service_account(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        return self.api.get(self._service_account_url(name, namespace))

    def list_service_accounts(self, namespace: NamespaceLike = None) -> List[Dict[str, Any]]:
        return self.api.list(self._service_account_url(namespace=namespace))

    def patch_service_account(
        self,
        service_account_name: str,
        secret_name: str,
        namespace: NamespaceLike = None,
    ) -> Any:
        """Append ``secret_name`` to the secrets of a service account."""

        _LOG.info("Linking Secret %s to ServiceAccount %s", secret_name, service_account_name)
        uri = self._service_account_url(service_account_name, namespace)
        return self.api.transport.patch_add_secret(uri, secret_name)

    def update_service_account_secrets(
        self,
        service_account: Dict[str, Any],
        secrets_to_keep: Iterable[Any],
        namespace: NamespaceLike = None,
    ) -> Any:
        """Replace the secrets of ``service_account``; used to unlink credentials."""

        name = service_account["metadata"]["name"]
        _LOG.info("Updating secrets of ServiceAccount %s", name)
        uri = self._service_account_url(name, namespace)
        return self.api.transport.patch_update_secrets(uri, list(secrets_to_keep))
