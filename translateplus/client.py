"""TranslatePlus client — one async method per remote capability.

Each method validates its own arguments, shapes the request and delegates
to the shared ``RequestExecutor``. Server payloads are returned verbatim.

    async with TranslatePlusClient(api_key="...") as client:
        result = await client.translate("Hello, world!", target="fr", source="en")
        print(result["translations"]["translation"])
"""

import os
from typing import Any

import httpx

from translateplus.config.models import ClientConfig
from translateplus.errors import TranslatePlusError
from translateplus.transport.executor import RequestExecutor
from translateplus.transport.request import RequestSpec

MAX_BATCH_TEXTS = 100
SUBTITLE_FORMATS = ("srt", "vtt")


class TranslatePlusClient:
    """Async client for the TranslatePlus translation API.

    Arguments left as None are read from ``TRANSLATEPLUS_*`` environment
    variables (see ``Settings``), falling back to the library defaults.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        max_concurrent: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = ClientConfig.from_settings(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            max_concurrent=max_concurrent,
        )
        self._executor = RequestExecutor(self.config, transport=transport)

    async def __aenter__(self) -> "TranslatePlusClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def in_flight(self) -> int:
        """Number of requests currently holding an admission slot."""
        return self._executor.in_flight

    async def close(self) -> None:
        await self._executor.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        return await self._executor.execute(RequestSpec(method, path, **kwargs))

    # --- Translation ---

    async def translate(self, text: str, target: str, source: str = "auto") -> dict:
        """Translate a single text."""
        return await self._request(
            "POST", "/v2/translate",
            data={"text": text, "source": source, "target": target},
        )

    async def translate_batch(self, texts: list[str], target: str, source: str = "auto") -> dict:
        """Translate up to 100 texts in one request.

        Raises:
            TranslatePlusError: VALIDATION if ``texts`` is empty, not a list,
                or longer than 100 items.
        """
        if not texts or not isinstance(texts, list):
            raise TranslatePlusError.validation("Texts array cannot be empty")
        if len(texts) > MAX_BATCH_TEXTS:
            raise TranslatePlusError.validation(
                f"Maximum {MAX_BATCH_TEXTS} texts allowed per batch request"
            )
        return await self._request(
            "POST", "/v2/translate/batch",
            data={"texts": texts, "source": source, "target": target},
        )

    async def translate_html(self, html: str, target: str, source: str = "auto") -> dict:
        """Translate HTML content, preserving tags and structure."""
        return await self._request(
            "POST", "/v2/translate/html",
            data={"html": html, "source": source, "target": target},
        )

    async def translate_email(
        self, subject: str, email_body: str, target: str, source: str = "auto"
    ) -> dict:
        """Translate an email subject and HTML body."""
        return await self._request(
            "POST", "/v2/translate/email",
            data={
                "subject": subject,
                "email_body": email_body,
                "source": source,
                "target": target,
            },
        )

    async def translate_subtitles(
        self, content: str, format: str, target: str, source: str = "auto"
    ) -> dict:
        """Translate SRT or VTT subtitle content."""
        if format not in SUBTITLE_FORMATS:
            raise TranslatePlusError.validation("Format must be 'srt' or 'vtt'")
        return await self._request(
            "POST", "/v2/translate/subtitles",
            data={"content": content, "format": format, "source": source, "target": target},
        )

    # --- Languages & account ---

    async def detect_language(self, text: str) -> dict:
        return await self._request("POST", "/v2/language_detect", data={"text": text})

    async def get_supported_languages(self) -> dict:
        return await self._request("GET", "/v2/supported_languages")

    async def get_account_summary(self) -> dict:
        """Credits remaining, plan and usage for the API key."""
        return await self._request("GET", "/v2/account/summary")

    # --- i18n jobs ---

    async def create_i18n_job(
        self,
        file_path: str,
        target_languages: list[str],
        source_language: str = "auto",
        webhook_url: str | None = None,
    ) -> dict:
        """Upload an i18n file and start an asynchronous translation job.

        Args:
            file_path: Local path of the i18n file (JSON, YAML, PO, ...).
            target_languages: Language codes, sent comma-joined.
            source_language: Source language code.
            webhook_url: Notified by the service when the job finishes.

        Returns:
            Job creation result, including ``job_id``.

        Raises:
            TranslatePlusError: VALIDATION if the file is missing or no
                target language is given.
        """
        if not file_path or not os.path.isfile(file_path):
            raise TranslatePlusError.validation(f"File not found: {file_path}")
        if not target_languages or not isinstance(target_languages, list):
            raise TranslatePlusError.validation("target_languages must be a non-empty array")

        form: dict[str, Any] = {
            "source_language": source_language,
            "target_languages": ",".join(target_languages),
        }
        if webhook_url:
            form["webhook_url"] = webhook_url

        return await self._request(
            "POST", "/v2/i18n/create_job",
            data=form,
            files={"file": file_path},
        )

    async def get_i18n_job_status(self, job_id: str) -> dict:
        if not job_id:
            raise TranslatePlusError.validation("job_id is required")
        return await self._request("GET", f"/v2/i18n/job/{job_id}")

    async def list_i18n_jobs(self, page: int = 1, page_size: int = 10) -> dict:
        return await self._request(
            "GET", "/v2/i18n/jobs",
            params={"page": page, "page_size": page_size},
        )
