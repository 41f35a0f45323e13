"""
Dispatch Configuration

Control logic settings only; no physical specifications.
"""

from dataclasses import dataclass, field
from typing import Dict, Any

ALLOCATION_STRATEGIES = ("DirectionalCost", "NearestCar")


@dataclass
class AllocationStrategyConfig:
    """Configuration for hall call allocation strategy"""
    name: str = "DirectionalCost"
    parameters: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("allocation_strategy.name cannot be empty")


@dataclass
class DispatchConfig:
    """
    Dispatcher configuration
    """
    allocation_strategy: AllocationStrategyConfig = field(default_factory=AllocationStrategyConfig)

    @classmethod
    def from_dict(cls, data: dict) -> 'DispatchConfig':
        """Create DispatchConfig from dictionary"""
        dispatch_data = (data or {}).get('dispatch', data) or {}

        alloc_data = dispatch_data.get('allocation_strategy') or {}
        allocation_strategy = AllocationStrategyConfig(
            name=alloc_data.get('name', 'DirectionalCost'),
            parameters=alloc_data.get('parameters', {}) or {}
        )

        return cls(allocation_strategy=allocation_strategy)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'dispatch': {
                'allocation_strategy': {
                    'name': self.allocation_strategy.name,
                    'parameters': dict(self.allocation_strategy.parameters)
                }
            }
        }

    def validate(self):
        """Validate configuration consistency"""
        if self.allocation_strategy.name not in ALLOCATION_STRATEGIES:
            raise ValueError(f"Unknown allocation strategy: {self.allocation_strategy.name}. "
                             f"Must be one of {', '.join(ALLOCATION_STRATEGIES)}")
