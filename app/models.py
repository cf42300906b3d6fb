from dataclasses import dataclass
from datetime import datetime
from typing import Dict


@dataclass(frozen=True)
class WeatherRecord:
    """Weather snapshot for a single city."""

    city: str
    temperature: float
    description: str
    observed_at: datetime

    def to_dict(self) -> Dict:
        return {
            'city': self.city,
            'temperature': self.temperature,
            'description': self.description,
            'observed_at': self.observed_at.isoformat()
        }
