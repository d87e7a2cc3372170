"""JSON-file persistence for accessory contexts."""

import json
import logging
from pathlib import Path

from floodlight.accessory.context import AccessoryContext
from floodlight.devices.errors import ValidationError

logger = logging.getLogger(__name__)


class AccessoryStore:
    """Persists accessory contexts keyed by accessory UUID."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> dict[str, AccessoryContext]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Could not load accessory cache: {e}. Starting empty.")
            return {}

        contexts = {}
        for uuid, entry in data.items():
            try:
                contexts[uuid] = AccessoryContext.from_dict(entry)
            except (ValidationError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Dropping cached accessory {uuid}: {e}")
        logger.info(f"Loaded {len(contexts)} accessories from {self.path}")
        return contexts

    def save(self, contexts: dict[str, AccessoryContext]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(
                    {uuid: context.to_dict() for uuid, context in contexts.items()},
                    f,
                    indent=2,
                )
            logger.debug(f"Accessory cache saved to {self.path}")
        except IOError as e:
            logger.error(f"Failed to save accessory cache: {e}")
