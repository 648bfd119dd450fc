"""CLI command implementations for the laser-safety application.

This package contains the subcommands of the laser-safety CLI:
- mpe, ael, pulse-train, critical: exposure limits
- nohd, classify, eyewear: hazard analyses
- evaluate, validate: scenario files
"""

from lasersafety.cli.commands.hazard import classify_command, eyewear_command, nohd_command
from lasersafety.cli.commands.limits import (
    ael_command,
    critical_command,
    mpe_command,
    pulse_train_command,
)
from lasersafety.cli.commands.scenario import evaluate_command, validate_command

__all__ = [
    "ael_command",
    "classify_command",
    "critical_command",
    "evaluate_command",
    "eyewear_command",
    "mpe_command",
    "nohd_command",
    "pulse_train_command",
    "validate_command",
]
