"""
Skill Profile Service - R&D Competency Platform
competency/services/skill_profile_service.py

Computes an employee's skill profile and caches it in Redis.
"""

import logging
import time
from datetime import date
from typing import Optional
from uuid import UUID

import redis

from competency.models.skill_profile import CacheInfo, SkillProfileResponse
from competency.repositories.employee_repository import EmployeeRepository
from competency.scoring.skill_calculator import SkillCalculator, skill_level, skill_level_label
from competency.services.cache import TTL_SKILL_PROFILE, get_cache, skill_profile_cache_key

logger = logging.getLogger(__name__)


def create_cache_info(hit: bool, key: str, latency_ms: float, ttl: int) -> CacheInfo:
    """Create CacheInfo object with human-readable message."""
    if hit:
        return CacheInfo(
            hit=True,
            source="redis",
            key=key,
            latency_ms=round(latency_ms, 3),
            ttl_seconds=ttl,
            message=f"Cache HIT - profile served from Redis in {latency_ms:.3f}ms",
        )
    return CacheInfo(
        hit=False,
        source="calculator",
        key=key,
        latency_ms=round(latency_ms, 3),
        ttl_seconds=ttl,
        message=f"Cache MISS - profile calculated in {latency_ms:.3f}ms, now cached for {ttl}s",
    )


class SkillProfileService:
    """Skill profile lookups with read-through caching."""

    def __init__(
        self,
        employee_repo: EmployeeRepository,
        calculator: Optional[SkillCalculator] = None,
    ):
        self.employee_repo = employee_repo
        self.calculator = calculator or SkillCalculator()

    def calculate(self, employee_id: UUID, as_of: Optional[date] = None) -> SkillProfileResponse:
        """Score every category; no cache involved."""
        employee = self.employee_repo.get_active(employee_id)
        records = self.employee_repo.get_records(employee_id)
        as_of = as_of or date.today()

        scores = self.calculator.calculate_all(employee, records, as_of)
        overall = float(scores.overall_score)
        return SkillProfileResponse(
            employee_id=employee_id,
            as_of=as_of,
            experience_score=float(scores.experience_score),
            certification_score=float(scores.certification_score),
            language_score=float(scores.language_score),
            training_score=float(scores.training_score),
            technical_score=float(scores.technical_score),
            soft_skill_score=float(scores.soft_skill_score),
            overall_score=overall,
            level=skill_level(overall),
            level_label=skill_level_label(overall),
        )

    def get_profile(self, employee_id: UUID, as_of: Optional[date] = None) -> SkillProfileResponse:
        """
        Return the employee's profile.

        Profiles for today are read through the cache; an explicit as_of
        always recalculates.
        """
        if as_of is not None and as_of != date.today():
            return self.calculate(employee_id, as_of)

        # Unknown / deleted employees must fail even when a stale entry exists
        self.employee_repo.get_active(employee_id)

        cache_key = skill_profile_cache_key(employee_id)
        cache = get_cache()
        start_time = time.time()

        # 1. Try cache first
        if cache:
            try:
                cached = cache.get(cache_key, SkillProfileResponse)
                if cached and cached.as_of == date.today():
                    latency = (time.time() - start_time) * 1000
                    cached.cache = create_cache_info(True, cache_key, latency, TTL_SKILL_PROFILE)
                    return cached
            except redis.RedisError as e:
                logger.warning(f"Cache read failed for {cache_key}: {e}")

        # 2. Cache miss - calculate
        profile = self.calculate(employee_id)
        latency = (time.time() - start_time) * 1000

        # 3. Store in cache
        if cache:
            try:
                cache.set(cache_key, profile, TTL_SKILL_PROFILE)
            except redis.RedisError as e:
                logger.warning(f"Cache write failed for {cache_key}: {e}")

        profile.cache = create_cache_info(False, cache_key, latency, TTL_SKILL_PROFILE)
        return profile
