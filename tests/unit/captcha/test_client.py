"""Tests for the rucaptcha service client."""

import pytest

from hwm_worker.captcha import InsufficientBalance, NotReadyYet, RuCaptchaClient, ServiceRejected
from tests.fixtures.mock_responses import (
    BASE64_CAPTCHA,
    POLL_NOT_READY,
    POLL_READY,
    POLL_READY_STRING_STATUS,
    SUBMIT_OK,
    SUBMIT_WRONG_KEY,
    SUBMIT_ZERO_BALANCE,
)


class TestRuCaptchaClientSubmit:
    """Tests for RuCaptchaClient.submit."""

    @pytest.mark.asyncio
    async def test_submit_returns_job_id(self, captcha_service, mock_logger):
        """A status 1 reply yields the job id."""
        captcha_service.script(submit=[SUBMIT_OK])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            external_id = await client.submit(BASE64_CAPTCHA)

        assert external_id == "12345"

    @pytest.mark.asyncio
    async def test_submit_sends_expected_form(self, captcha_service, mock_logger):
        """The form carries method, key, body, numeric and json fields."""
        captcha_service.script(submit=[SUBMIT_OK])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            await client.submit(BASE64_CAPTCHA)

        assert captcha_service.submissions == [{
            "method": "base64",
            "key": "test_api_key",
            "body": BASE64_CAPTCHA,
            "numeric": "4",
            "json": "1",
        }]

    @pytest.mark.asyncio
    async def test_submit_zero_balance(self, captcha_service, mock_logger):
        """ERROR_ZERO_BALANCE raises InsufficientBalance with the service text."""
        captcha_service.script(submit=[SUBMIT_ZERO_BALANCE])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            with pytest.raises(InsufficientBalance) as exc_info:
                await client.submit(BASE64_CAPTCHA)

        assert str(exc_info.value) == "No credits"

    @pytest.mark.asyncio
    async def test_submit_other_error_is_rejected(self, captcha_service, mock_logger):
        """Any other error code raises ServiceRejected with the raw response."""
        captcha_service.script(submit=[SUBMIT_WRONG_KEY])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            with pytest.raises(ServiceRejected) as exc_info:
                await client.submit(BASE64_CAPTCHA)

        assert exc_info.value.response == SUBMIT_WRONG_KEY
        assert "ERROR_WRONG_USER_KEY" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_submit_invalid_json_is_rejected(self, captcha_service, mock_logger):
        """A non JSON body is reported as ServiceRejected."""
        captcha_service.script(submit=["<html>Bad Gateway</html>"])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            with pytest.raises(ServiceRejected):
                await client.submit(BASE64_CAPTCHA)


class TestRuCaptchaClientPoll:
    """Tests for RuCaptchaClient.poll."""

    @pytest.mark.asyncio
    async def test_poll_returns_solved_text(self, captcha_service, mock_logger):
        """A status 1 reply yields the solved text."""
        captcha_service.script(poll=[POLL_READY])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            assert await client.poll("12345") == "ABCD"

    @pytest.mark.asyncio
    async def test_poll_sends_expected_query(self, captcha_service, mock_logger):
        """The query carries key, action, id and json."""
        captcha_service.script(poll=[POLL_READY])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            await client.poll("12345")

        assert captcha_service.polls == [{
            "key": "test_api_key",
            "action": "get",
            "id": "12345",
            "json": "1",
        }]

    @pytest.mark.asyncio
    async def test_poll_accepts_string_status(self, captcha_service, mock_logger):
        """Status is compared as text, so "1" also means ready."""
        captcha_service.script(poll=[POLL_READY_STRING_STATUS])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            assert await client.poll("12345") == "WXYZ"

    @pytest.mark.asyncio
    async def test_poll_not_ready(self, captcha_service, mock_logger):
        """A status 0 reply raises NotReadyYet."""
        captcha_service.script(poll=[POLL_NOT_READY])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            with pytest.raises(NotReadyYet) as exc_info:
                await client.poll("12345")

        assert exc_info.value.response == POLL_NOT_READY

    @pytest.mark.asyncio
    async def test_one_request_per_call(self, captcha_service, mock_logger):
        """The client never retries by itself."""
        captcha_service.script(poll=[POLL_NOT_READY, POLL_READY])

        async with RuCaptchaClient("test_api_key", base_url=captcha_service.base_url, logger=mock_logger) as client:
            with pytest.raises(NotReadyYet):
                await client.poll("12345")

        assert len(captcha_service.polls) == 1


class TestRuCaptchaClientSettings:
    """Construction from settings."""

    def test_from_settings(self, test_settings):
        client = RuCaptchaClient.from_settings(test_settings)

        assert client.api_key == "test_api_key"
        assert client.submit_url == "http://rucaptcha.com/in.php"
        assert client.poll_url == "http://rucaptcha.com/res.php"
