"""Infrastructure layer - serialization and formatters."""

from .formatters import JsonExporter, ReportFormatter
from .serializers import (
    classification_to_dict,
    critical_to_dict,
    eyewear_to_dict,
    limit_to_dict,
    multiwavelength_to_dict,
    nohd_to_dict,
    pulse_train_to_dict,
    quantity_to_dict,
    report_to_dict,
    validation_to_dict,
)

__all__ = [
    # Formatters
    "JsonExporter",
    "ReportFormatter",
    # Serializers
    "classification_to_dict",
    "critical_to_dict",
    "eyewear_to_dict",
    "limit_to_dict",
    "multiwavelength_to_dict",
    "nohd_to_dict",
    "pulse_train_to_dict",
    "quantity_to_dict",
    "report_to_dict",
    "validation_to_dict",
]
