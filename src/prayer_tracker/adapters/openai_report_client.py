"""OpenAI Responses API client for narrative reports."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from prayer_tracker.services.reports import ReportClient, ReportGenerationError


@dataclass
class OpenAIReportClient(ReportClient):
    """Report client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIReportClient":
        """Create an OpenAI report client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(self, *, model: str, prompt: str, store: bool) -> str:
        """Call OpenAI Responses API and return the output text."""
        try:
            response = await self.client.responses.create(
                model=model, input=prompt, store=store
            )
        except OpenAIError as exc:
            raise ReportGenerationError(
                "Failed to generate report. Please try again later."
            ) from exc
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
