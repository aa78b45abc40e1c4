"""Change log accumulated while merging models."""

from types import MappingProxyType

from gorshochek.schemas.changes import ChangeLog, ChangeType

GROUPS = ("added", "modified", "removed")


class Changes:
    """Ordered record of added, modified and removed pages.

    Entries are appended only. Each entry is a dict of the form
    ``{"type": "page", "url": url}``.
    """

    def __init__(self):
        self._groups: dict[str, list[dict]] = {group: [] for group in GROUPS}

    def __repr__(self) -> str:
        counts = ", ".join(f"{g}={len(self._groups[g])}" for g in GROUPS)
        return f"Changes({counts})"

    @staticmethod
    def entry(url: str, change_type: ChangeType = ChangeType.PAGE) -> dict:
        return {"type": change_type.value, "url": url}

    def push_change_to_added_group(self, url: str) -> None:
        self._groups["added"].append(self.entry(url))

    def push_change_to_modified_group(self, url: str) -> None:
        self._groups["modified"].append(self.entry(url))

    def push_change_to_removed_group(self, url: str) -> None:
        self._groups["removed"].append(self.entry(url))

    def extend(self, added=(), modified=(), removed=()) -> None:
        """Append whole batches of urls to each group."""
        self._groups["added"].extend(self.entry(url) for url in added)
        self._groups["modified"].extend(self.entry(url) for url in modified)
        self._groups["removed"].extend(self.entry(url) for url in removed)

    @property
    def added(self) -> tuple[dict, ...]:
        return tuple(self._groups["added"])

    @property
    def modified(self) -> tuple[dict, ...]:
        return tuple(self._groups["modified"])

    @property
    def removed(self) -> tuple[dict, ...]:
        return tuple(self._groups["removed"])

    def get_changes(self) -> MappingProxyType:
        """Return a read-only view of all three groups."""
        return MappingProxyType(
            {group: tuple(self._groups[group]) for group in GROUPS}
        )

    def has_changes(self) -> bool:
        return any(self._groups[group] for group in GROUPS)

    def to_change_log(self) -> ChangeLog:
        """Convert to the persisted change log schema."""
        return ChangeLog.model_validate(
            {group: list(self._groups[group]) for group in GROUPS}
        )
