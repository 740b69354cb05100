"""Known build-setting fixes, keyed by name.

Each fix is plain data: the target to patch and the settings to force on
every one of its build configurations. Adding a fix means adding an entry
here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from podfix.patcher import PatchReport, patch

BORINGSSL_TARGET = "BoringSSL-GRPC"


@dataclass(frozen=True)
class Fix:
    name: str
    target: str
    overrides: Mapping = field(default_factory=dict)
    description: str = ""

    def __post_init__(self):
        # read-only: FIXES is shared process-wide
        overrides = {key: tuple(value) if isinstance(value, list) else value for key, value in self.overrides.items()}
        object.__setattr__(self, "overrides", MappingProxyType(overrides))


FIXES = MappingProxyType(
    {
        fix.name: fix
        for fix in (
            Fix(
                name="boringssl-debug-symbols",
                target=BORINGSSL_TARGET,
                overrides={
                    # removes the -G flag by turning off debug symbol generation
                    "GCC_GENERATE_DEBUGGING_SYMBOLS": "NO",
                    "DEBUG_INFORMATION_FORMAT": "dwarf",
                    "GCC_OPTIMIZATION_LEVEL": "0",
                    "WARNING_CFLAGS": "-w",
                    "OTHER_CFLAGS": ["-w"],
                },
                description="Disable debug symbols and silence warnings for BoringSSL-GRPC",
            ),
            Fix(
                name="boringssl-warnings",
                target=BORINGSSL_TARGET,
                overrides={
                    # NO, not YES
                    "GCC_WARN_INHIBIT_ALL_WARNINGS": "NO",
                },
                description="Stop inhibiting warnings for BoringSSL-GRPC",
            ),
        )
    }
)

DEFAULT_FIX = "boringssl-warnings"


def get_fix(name: str) -> Fix:
    try:
        return FIXES[name]
    except KeyError:
        raise KeyError(f"unknown fix {name!r} (known: {', '.join(FIXES)})") from None


def apply_fix(path, fix: Fix) -> PatchReport:
    return patch(path, fix.target, fix.overrides)
