"""Riot API HTTP client with bounded concurrency, retry and rate-limit backoff."""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ...protocols import ConcurrencyLimiterProtocol
from ..config import get_global_settings
from .constants import Platform, Region
from .endpoints import RequestSpec, RiotAPIEndpoints
from .errors import NetworkError, NotFoundError, RiotAPIError, UpstreamError
from .limiter import ConcurrencyLimiter
from .models import (
    AccountDTO,
    ChampionMasteryDTO,
    LeagueEntryDTO,
    MatchDTO,
    SummonerDTO,
)

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
SleepFunc = Callable[[float], Awaitable[Any]]


class RiotAPIClient:
    """Riot API client shared by every aggregation in the process.

    Every upstream call goes through :meth:`execute`, which holds one permit
    of the injected :class:`ConcurrencyLimiter` per HTTP attempt.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        region: Optional[Region] = None,
        platform: Optional[Platform] = None,
        limiter: Optional[ConcurrencyLimiterProtocol] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        default_retry_after: Optional[float] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Initialize Riot API client.

        Args:
            api_key: Riot API key (uses config if None)
            region: Default region for regional endpoints
            platform: Default platform for platform endpoints
            limiter: Shared concurrency limiter (one is created from config if None)
            max_retries: Generic retry budget for non-404/429 failures
            retry_delay: Fixed delay between generic retries, in seconds
            default_retry_after: 429 backoff when no Retry-After header is sent
            timeout: Per-attempt HTTP timeout, in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
            sleep: Coroutine used for every backoff wait
        """
        settings = get_global_settings()
        self.api_key = api_key if api_key is not None else settings.riot_api_key
        self.region = region or Region(settings.riot_region)
        self.platform = platform or Platform(settings.riot_platform)
        self.limiter: ConcurrencyLimiterProtocol = limiter or ConcurrencyLimiter(
            settings.riot_max_concurrent_requests
        )
        self.max_retries = (
            settings.riot_max_retries if max_retries is None else max_retries
        )
        self.retry_delay = (
            settings.riot_retry_delay_seconds if retry_delay is None else retry_delay
        )
        self.default_retry_after = (
            settings.riot_default_retry_after_seconds
            if default_retry_after is None
            else default_retry_after
        )
        self.timeout = timeout or settings.riot_request_timeout_seconds
        self.endpoints = RiotAPIEndpoints(
            self.region, self.platform, settings.riot_api_base_domain
        )

        self._transport = transport
        self._sleep = sleep

        # HTTP session
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "X-Riot-Token": self.api_key,
                        "Accept": "application/json",
                        "User-Agent": "RiftProfile/1.0",
                    }
                    limits = httpx.Limits(
                        max_keepalive_connections=self.limiter.capacity,
                        max_connections=self.limiter.capacity,
                    )

                    self.session = httpx.AsyncClient(
                        headers=headers,
                        timeout=httpx.Timeout(self.timeout),
                        limits=limits,
                        transport=self._transport,
                    )

                    logger.info(
                        "Riot API client session started",
                        region=self.region.value,
                        platform=self.platform.value,
                        max_concurrent=self.limiter.capacity,
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Riot API client session closed")

    def _retry_after_seconds(self, headers: httpx.Headers) -> float:
        """Read the Retry-After hint, falling back to the configured default."""
        raw = headers.get("Retry-After")
        if raw is None:
            return self.default_retry_after
        try:
            value = float(raw)
        except ValueError:
            return self.default_retry_after
        return value if value >= 0 else self.default_retry_after

    def _log_outcome(
        self,
        spec: RequestSpec,
        outcome: str,
        started: float,
        attempts: int,
        rate_limited: int,
        status_code: Optional[int] = None,
    ) -> None:
        log = logger.info if outcome in ("success", "not_found") else logger.warning
        log(
            "riot_api_request",
            method=spec.method,
            path=spec.path,
            outcome=outcome,
            status_code=status_code,
            attempts=attempts,
            rate_limited=rate_limited,
            latency_ms=round((time.perf_counter() - started) * 1000, 1),
        )

    async def execute(self, spec: RequestSpec) -> Any:
        """
        Execute one logical upstream call.

        404 fails immediately. 429 sleeps for Retry-After and tries again
        without spending a retry slot. Any other failure (non-2xx status,
        transport error, undecodable body) is retried ``max_retries`` times
        with a fixed delay.

        Args:
            spec: Request to perform

        Returns:
            Decoded JSON body

        Raises:
            NotFoundError: Upstream answered 404
            UpstreamError: Non-2xx responses exhausted the retry budget
            NetworkError: Transport failures exhausted the retry budget
        """
        await self.start_session()
        if self.session is None:
            raise RiotAPIError("Session not initialized", url=spec.url)

        started = time.perf_counter()
        attempts = 0
        rate_limited = 0
        failures = 0

        while True:
            attempts += 1
            try:
                async with self.limiter.slot():
                    response = await self.session.request(
                        spec.method, spec.url, params=spec.params or None
                    )
            except httpx.RequestError as e:
                failures += 1
                logger.debug(
                    "Riot API transport failure",
                    path=spec.path,
                    attempt=attempts,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                if failures > self.max_retries:
                    self._log_outcome(
                        spec, "network_error", started, attempts, rate_limited
                    )
                    raise NetworkError(
                        f"Request failed: {type(e).__name__}: {e}",
                        url=spec.url,
                        attempts=attempts,
                    ) from e
                await self._sleep(self.retry_delay)
                continue

            status = response.status_code

            if 200 <= status < 300:
                try:
                    data = response.json()
                except ValueError as e:
                    failures += 1
                    if failures > self.max_retries:
                        self._log_outcome(
                            spec, "invalid_body", started, attempts, rate_limited, status
                        )
                        raise UpstreamError(
                            "Response body is not valid JSON",
                            status_code=status,
                            url=spec.url,
                            attempts=attempts,
                        ) from e
                    await self._sleep(self.retry_delay)
                    continue
                self._log_outcome(
                    spec, "success", started, attempts, rate_limited, status
                )
                return data

            if status == 404:
                self._log_outcome(
                    spec, "not_found", started, attempts, rate_limited, status
                )
                raise NotFoundError(
                    "Resource not found",
                    status_code=status,
                    url=spec.url,
                    attempts=attempts,
                )

            if status == 429:
                rate_limited += 1
                wait = self._retry_after_seconds(response.headers)
                logger.warning(
                    "Rate limited, backing off",
                    path=spec.path,
                    retry_after=wait,
                    rate_limited=rate_limited,
                    app_rate_limit=response.headers.get("X-App-Rate-Limit"),
                    method_rate_limit=response.headers.get("X-Method-Rate-Limit"),
                )
                await self._sleep(wait)
                continue

            failures += 1
            if failures > self.max_retries:
                self._log_outcome(
                    spec, "upstream_error", started, attempts, rate_limited, status
                )
                raise UpstreamError(
                    f"Upstream returned {status}",
                    status_code=status,
                    url=spec.url,
                    attempts=attempts,
                )
            await self._sleep(self.retry_delay)

    async def _fetch_model(self, spec: RequestSpec, model: Type[ModelT]) -> ModelT:
        data = await self.execute(spec)
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise UpstreamError(
                f"Malformed {model.__name__} payload: {e.error_count()} errors",
                url=spec.url,
            ) from e

    async def _fetch_model_list(
        self, spec: RequestSpec, model: Type[ModelT]
    ) -> List[ModelT]:
        data = await self.execute(spec)
        if not isinstance(data, list):
            raise UpstreamError(
                f"Expected list response for {model.__name__}, got {type(data).__name__}",
                url=spec.url,
            )
        try:
            return [model.model_validate(item) for item in data]
        except PydanticValidationError as e:
            raise UpstreamError(
                f"Malformed {model.__name__} payload: {e.error_count()} errors",
                url=spec.url,
            ) from e

    # Account endpoints
    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: Optional[Region] = None
    ) -> AccountDTO:
        """Get account by Riot ID (gameName#tagLine)."""
        spec = self.endpoints.account_by_riot_id(game_name, tag_line, region)
        return await self._fetch_model(spec, AccountDTO)

    # Summoner endpoints
    async def get_summoner_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> SummonerDTO:
        """Get summoner by PUUID."""
        spec = self.endpoints.summoner_by_puuid(puuid, platform)
        return await self._fetch_model(spec, SummonerDTO)

    # League endpoints
    async def get_league_entries_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> List[LeagueEntryDTO]:
        """Get league entries by PUUID."""
        spec = self.endpoints.league_entries_by_puuid(puuid, platform)
        return await self._fetch_model_list(spec, LeagueEntryDTO)

    async def get_league_entries_by_summoner(
        self, summoner_id: str, platform: Optional[Platform] = None
    ) -> List[LeagueEntryDTO]:
        """Get league entries by encrypted summoner ID."""
        spec = self.endpoints.league_entries_by_summoner(summoner_id, platform)
        return await self._fetch_model_list(spec, LeagueEntryDTO)

    # Champion mastery endpoints
    async def get_top_masteries_by_puuid(
        self, puuid: str, count: int, platform: Optional[Platform] = None
    ) -> List[ChampionMasteryDTO]:
        """Get top-N champion masteries by PUUID."""
        spec = self.endpoints.top_masteries_by_puuid(puuid, count, platform)
        return await self._fetch_model_list(spec, ChampionMasteryDTO)

    async def get_top_masteries_by_summoner(
        self, summoner_id: str, count: int, platform: Optional[Platform] = None
    ) -> List[ChampionMasteryDTO]:
        """Get top-N champion masteries by encrypted summoner ID."""
        spec = self.endpoints.top_masteries_by_summoner(summoner_id, count, platform)
        return await self._fetch_model_list(spec, ChampionMasteryDTO)

    # Match endpoints
    async def get_match_ids(
        self,
        puuid: str,
        start: int = 0,
        count: int = 20,
        region: Optional[Region] = None,
    ) -> List[str]:
        """Get one page of match ids, newest first."""
        spec = self.endpoints.match_ids_by_puuid(puuid, start, count, region)
        data = await self.execute(spec)
        if not isinstance(data, list) or not all(isinstance(i, str) for i in data):
            raise UpstreamError("Expected a list of match ids", url=spec.url)
        return data

    async def get_match(
        self, match_id: str, region: Optional[Region] = None
    ) -> MatchDTO:
        """Get match details by match ID."""
        spec = self.endpoints.match_by_id(match_id, region)
        return await self._fetch_model(spec, MatchDTO)

    def stats(self) -> Dict[str, Any]:
        """Limiter snapshot plus routing, for the health endpoint."""
        return {
            "region": self.region.value,
            "platform": self.platform.value,
            **self.limiter.snapshot(),
        }
