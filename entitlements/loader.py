from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from config import settings

from .models import PlanDefinition

logger = logging.getLogger(__name__)


class PlanCatalogLoader:
    """Plan catalog collaborator backed by config/plans.json."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        self._config_path = Path(config_path) if config_path else settings.PLANS_CONFIG_PATH

    async def fetch_active_plans(self) -> List[PlanDefinition]:
        """Read the catalog from disk and return active plans only."""
        plans = self._parse_config(self._read_config_file())
        active = [plan for plan in plans if plan.is_active]
        logger.debug(
            "Loaded plan catalog",
            extra={"path": str(self._config_path), "plans": len(plans), "active": len(active)},
        )
        return active

    def _read_config_file(self) -> dict:
        with self._config_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise ValueError("plans.json must contain a top-level object")
        return raw

    @staticmethod
    def _parse_config(raw: dict) -> List[PlanDefinition]:
        plans_raw = raw.get("plans")
        if not isinstance(plans_raw, dict):
            raise ValueError("plans.json must include an object field named 'plans'")

        plans: List[PlanDefinition] = []
        for plan_name, plan_data in plans_raw.items():
            if not isinstance(plan_name, str) or not plan_name.strip():
                raise ValueError("each plan name must be a non-empty string")
            if not isinstance(plan_data, dict):
                raise ValueError(f"plan '{plan_name}' must be an object")

            modules = plan_data.get("modules", [])
            if not isinstance(modules, list):
                raise ValueError(f"plan '{plan_name}' modules must be a list of module ids")

            # Invalid entries are skipped; the rest of the catalog still loads
            try:
                plan = PlanDefinition.from_record({**plan_data, "name": plan_name.strip()})
            except ValueError as exc:
                logger.warning(
                    "Skipping invalid plan in catalog file",
                    extra={"plan": plan_name, "error": str(exc)},
                )
                continue
            plans.append(plan)

        if not plans:
            raise ValueError("plans.json must define at least one valid plan")

        return plans
