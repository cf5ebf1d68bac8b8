"""
LLM Service
Centralized client for an OpenAI-compatible chat completions endpoint
"""

import logging
from typing import Dict, List, Optional, Any
import json
import re
import asyncio

import requests

from config import settings


logger = logging.getLogger(__name__)


class LLMService:
    """
    Service for interacting with the hosted LLM
    """

    def __init__(self):
        self.model_name = settings.LLM_MODEL
        self.temperature = settings.LLM_TEMPERATURE
        self.max_tokens = settings.LLM_MAX_TOKENS
        self.base_url = settings.LLM_BASE_URL.rstrip("/")

        # Usage tracking
        self._total_tokens_used = 0
        self._request_count = 0

    @property
    def configured(self) -> bool:
        return bool(settings.LLM_API_KEY)

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        stop_sequences: Optional[List[str]] = None
    ) -> str:
        """
        Generate a response from the LLM

        Args:
            prompt: User prompt/message
            system_prompt: System instructions
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum response tokens
            stop_sequences: Sequences that stop generation

        Returns:
            Generated text response
        """
        if not self.configured:
            raise RuntimeError("LLM is not configured. Set LLM_API_KEY.")

        headers = {
            "Authorization": f"Bearer {settings.LLM_API_KEY}",
            "Content-Type": "application/json",
        }

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": self.model_name,
            "messages": messages,
            "temperature": temperature if temperature is not None else self.temperature,
            "max_tokens": max_tokens if max_tokens is not None else self.max_tokens,
        }
        if stop_sequences:
            payload["stop"] = stop_sequences

        try:
            resp = await asyncio.get_running_loop().run_in_executor(
                None,
                lambda: requests.post(
                    f"{self.base_url}/chat/completions",
                    headers=headers,
                    json=payload,
                    timeout=settings.SUGGESTION_TIMEOUT_SECONDS,
                ),
            )

            if resp.status_code != 200:
                logger.error("LLM API error %s: %s", resp.status_code, resp.text)
                raise RuntimeError(f"LLM API error: {resp.status_code}")

            data = resp.json()
            choices = data.get("choices") or []
            if not choices:
                return ""
            text = choices[0].get("message", {}).get("content", "")

            usage = data.get("usage") or {}
            self._total_tokens_used += usage.get("total_tokens", 0)
            self._request_count += 1

            return text
        except requests.RequestException as e:
            logger.error("LLM request failed: %s", e)
            raise

    async def generate_json(
        self,
        prompt: str,
        schema_hint: Optional[Dict[str, Any]] = None,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Generate a JSON response from the LLM

        Args:
            prompt: User prompt
            schema_hint: Example of expected JSON structure
            system_prompt: System instructions

        Returns:
            Parsed JSON response, {} when the reply is not JSON
        """
        json_system = system_prompt or ""
        json_system += "\n\nYou must respond with valid JSON only. No additional text, no markdown code blocks, just pure JSON."

        if schema_hint:
            json_system += f"\n\nExpected JSON structure:\n{json.dumps(schema_hint, indent=2)}"

        response = await self.generate(
            prompt=prompt,
            system_prompt=json_system,
            **kwargs
        )

        return self.parse_json_response(response)

    def parse_json_response(
        self,
        response: str,
        default: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Parse JSON from LLM response, handling common issues

        Args:
            response: Raw LLM response
            default: Default value if parsing fails

        Returns:
            Parsed JSON dictionary
        """
        if default is None:
            default = {}

        if not response:
            return default

        response = response.strip()

        try:
            return json.loads(response)
        except json.JSONDecodeError:
            pass

        # Try to extract JSON from markdown code blocks
        json_patterns = [
            r'```json\s*([\s\S]*?)\s*```',
            r'```\s*([\s\S]*?)\s*```',
            r'\{[\s\S]*\}',
        ]

        for pattern in json_patterns:
            match = re.search(pattern, response)
            if match:
                try:
                    json_str = match.group(1) if '```' in pattern else match.group(0)
                    return json.loads(json_str.strip())
                except json.JSONDecodeError:
                    continue

        logger.warning(f"Failed to parse JSON from response: {response[:200]}...")
        return default

    def get_usage_stats(self) -> Dict[str, Any]:
        """Get usage statistics"""
        return {
            "total_tokens": self._total_tokens_used,
            "request_count": self._request_count,
            "model": self.model_name,
        }


# Singleton instance
llm_service = LLMService()
