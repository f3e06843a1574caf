import logging
from typing import Callable, Dict, List

from jobdaemon.adapters.base import SourceAdapter
from jobdaemon.adapters.github.adapter import GitHubTableAdapter
from jobdaemon.adapters.github.config import REPOSITORIES
from jobdaemon.adapters.internlist.adapter import (
    InternListExportAdapter,
    InternListGridAdapter,
)

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Callable[[], SourceAdapter]] = {
    "internlist": lambda: InternListGridAdapter("internlist"),
    "internlist_export": lambda: InternListExportAdapter("internlist_export"),
    **{
        name: (lambda name=name, url=url: GitHubTableAdapter(name, url))
        for name, url in REPOSITORIES.items()
    },
}


def build_adapters(names: List[str]) -> List[SourceAdapter]:
    """
    Instantiate the enabled sources, in the given order.
    """
    adapters = []
    for name in names:
        factory = ADAPTERS.get(name.lower())
        if not factory:
            raise ValueError(
                f"Source '{name}' not supported. Available sources: {list(ADAPTERS.keys())}"
            )
        adapters.append(factory())

    logger.info(f"Enabled sources: {[adapter.name for adapter in adapters]}")
    return adapters
