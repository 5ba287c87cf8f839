
import yaml, json, os, logging, typing as t
from pathlib import Path

from .filters import Filter, FilterGroup, FilterMap, build_filter_map

log = logging.getLogger("registry")

FILTERS_PATH = Path(os.getenv("FILTERS_FILE", "config/filters.yaml"))


class FilterRegistry:
    def __init__(self, path: t.Optional[Path] = None):
        self.path = Path(path) if path is not None else FILTERS_PATH
        self.groups: list[FilterGroup] = []
        self.filter_map: FilterMap = {}

    def load(self) -> None:
        if not self.path.exists():
            raise RuntimeError(f"Filter catalog file not found: {self.path}")
        with self.path.open("r", encoding="utf-8") as f:
            if self.path.suffix.lower() in (".yaml", ".yml"):
                cfg = yaml.safe_load(f)
            else:
                cfg = json.load(f)
        if isinstance(cfg, dict):
            cfg = cfg.get("groups", [])
        if not isinstance(cfg, list):
            raise RuntimeError(f"Bad filter catalog in {self.path}: expected a list of groups")

        groups: list[FilterGroup] = []
        for g in cfg:
            if not isinstance(g, dict):
                raise RuntimeError(f"Bad filter group: {g}")
            for fil in g.get("filters") or []:
                if not isinstance(fil, dict) or not fil.get("field"):
                    raise RuntimeError(f"Bad filter mapping in group {g.get('label')!r}: {fil}")
            groups.append(FilterGroup.from_dict(g))

        self.groups = groups
        self.filter_map = build_filter_map(groups)
        log.info("Loaded %d filters in %d groups from %s", len(self.filter_map), len(groups), self.path)

    def get_filter(self, field_name: str) -> Filter:
        for group in self.groups:
            f = group.get_filter(field_name)
            if f.field:
                return f
        return Filter()

    def replace_filter(self, new: Filter) -> None:
        for group in self.groups:
            group.replace_filter(new)
        self.filter_map = build_filter_map(self.groups)

    def to_dict(self) -> dict[str, t.Any]:
        return {"groups": [g.to_dict() for g in self.groups]}
