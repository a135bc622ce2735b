"""Species tags used to group agents into same-kind schools."""

from enum import IntEnum

from .errors import InvalidConfiguration


class AgentKind(IntEnum):
    """
    Closed set of fish species.

    Values are stored directly in the flock's int32 kind buffer, so new
    species are added as new members, never as free-form strings.
    """
    BLUE_GOLDFISH = 0
    PIRANHA = 1
    CORAL_GROUPER = 2
    SUNFISH = 3

    @property
    def label(self) -> str:
        """CamelCase display name, e.g. ``BlueGoldfish``."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def parse(cls, value) -> "AgentKind":
        """Accept a member, its integer value, or a name in either spelling."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().replace("-", "").replace("_", "").replace(" ", "").lower()
            for kind in cls:
                if key == kind.label.lower():
                    return kind
            raise InvalidConfiguration(f"Unknown agent kind: {value!r}")
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise InvalidConfiguration(f"Unknown agent kind: {value!r}") from None
