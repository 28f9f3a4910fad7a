from __future__ import annotations

from typing import Any, Optional

import requests

from modelgate import logger as logger_mod
from modelgate.config import SapCredentials

from ._json import check_schema, parse_and_validate
from .base import effective_temperature
from .errors import BackendError, CredentialError
from .oauth import ClientCredentialsToken
from .types import InferenceRequest

log = logger_mod.get_logger()

ORCHESTRATION_SCENARIO = "orchestration"


class SAPAIProvider:
    """Calls models behind SAP AI Core orchestration.

    Each call exchanges client credentials for a bearer token, resolves the
    running orchestration deployment in the resource group and posts one
    completion request naming the model.
    """

    def __init__(
        self,
        model: str,
        *,
        credentials: Optional[SapCredentials],
        temperature: Optional[float] = None,
        timeout_s: float = 60.0,
        session: Optional[requests.Session] = None,
        token: Optional[ClientCredentialsToken] = None,
    ):
        self.model = model
        self.credentials = credentials
        self.temperature = temperature
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._token = token

    def _require_credentials(self) -> SapCredentials:
        if self.credentials is None:
            raise CredentialError("SAP AI Core credentials are not configured")
        missing = self.credentials.missing_fields()
        if missing:
            raise CredentialError(
                f"SAP AI Core credentials incomplete, missing: {', '.join(missing)}"
            )
        return self.credentials

    def _bearer_token(self, creds: SapCredentials) -> str:
        if self._token is None:
            self._token = ClientCredentialsToken(
                creds.token_url,
                creds.client_id,
                creds.client_secret,
                session=self._session,
                timeout_s=self.timeout_s,
            )
        return self._token.get()

    def _call(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            resp = getattr(self._session, method)(url, timeout=self.timeout_s, **kwargs)
        except requests.RequestException as e:
            raise BackendError(f"SAP AI Core request to {url} failed: {e}") from e

        if resp.status_code >= 400:
            raise BackendError(
                f"SAP AI Core request to {url} failed: {resp.text[:500]}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise BackendError(
                f"SAP AI Core returned non-JSON body from {url}",
                status_code=resp.status_code,
            ) from e

    def _api_root(self, creds: SapCredentials) -> str:
        root = creds.base_url.rstrip("/")
        if root.endswith("/v2"):
            root = root[: -len("/v2")]
        return root

    def _deployment_url(self, creds: SapCredentials, headers: dict[str, str]) -> str:
        payload = self._call(
            "get",
            f"{self._api_root(creds)}/v2/lm/deployments",
            headers=headers,
            params={"scenarioId": ORCHESTRATION_SCENARIO, "status": "RUNNING"},
        )
        resources = payload.get("resources") if isinstance(payload, dict) else None
        if resources is not None and not isinstance(resources, list):
            resources = None
        if resources is None or not all(isinstance(r, dict) for r in resources):
            raise BackendError("Unexpected SAP AI Core deployments response")

        for resource in resources:
            url = resource.get("deploymentUrl")
            if isinstance(url, str) and url:
                return url.rstrip("/")
        raise BackendError(
            f"No running {ORCHESTRATION_SCENARIO} deployment in resource group "
            f"'{creds.resource_group}'"
        )

    def _completion_body(
        self, request: InferenceRequest, temperature: Optional[float]
    ) -> dict[str, Any]:
        llm_config: dict[str, Any] = {"model_name": self.model, "model_params": {}}
        if temperature is not None:
            llm_config["model_params"]["temperature"] = temperature

        return {
            "orchestration_config": {
                "module_configurations": {
                    "templating_module_config": {
                        "template": [
                            {"role": m.role, "content": m.content}
                            for m in request.messages()
                        ],
                        "response_format": {
                            "type": "json_schema",
                            "json_schema": {
                                "name": request.schema_name,
                                "schema": request.schema,
                                "strict": False,
                            },
                        },
                    },
                    "llm_module_config": llm_config,
                }
            },
            "input_params": {},
        }

    def _extract_content(self, payload: dict[str, Any]) -> str:
        try:
            content = payload["orchestration_result"]["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise BackendError("Unexpected SAP AI Core response shape") from e
        if not isinstance(content, str):
            raise BackendError("SAP AI Core response content is not text")
        return content

    def run_inference(self, request: InferenceRequest) -> dict[str, Any]:
        check_schema(request.schema)
        creds = self._require_credentials()
        token = self._bearer_token(creds)

        headers = {
            "Authorization": f"Bearer {token}",
            "AI-Resource-Group": creds.resource_group,
        }
        deployment_url = self._deployment_url(creds, headers)

        temperature = effective_temperature(self.temperature, request)
        log.debug(f"sap-ai-sdk request: model={self.model} temperature={temperature}")

        payload = self._call(
            "post",
            f"{deployment_url}/completion",
            headers={**headers, "Content-Type": "application/json"},
            json=self._completion_body(request, temperature),
        )
        return parse_and_validate(self._extract_content(payload), request.schema)
