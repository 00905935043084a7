from __future__ import annotations
from dataclasses import dataclass, field, fields
from enum import Enum
import torch

DEFAULT_THRESHOLD = 0.0005


def _check_keys(data, allowed: set, section: str) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"{section} must be a mapping, got {type(data).__name__}")
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValueError(f"unknown {section} keys: {', '.join(unknown)}")


class DeviceType(str, Enum):
    AUTO = "auto"
    CPU = "cpu"
    CUDA = "cuda"
    MPS = "mps"


@dataclass
class CompressionConfig:
    # Normalized 0-1 distance scale; a quadrant merges when its variance is strictly below.
    threshold: float = DEFAULT_THRESHOLD

    def validate(self) -> None:
        if not 0 <= self.threshold <= 1:
            raise ValueError("threshold must be in [0, 1]")


@dataclass
class QuadpressConfig:
    compression: CompressionConfig = field(default_factory=CompressionConfig)
    max_workers: int = 1
    device: DeviceType = DeviceType.CPU

    def __post_init__(self) -> None:
        self.device = DeviceType(self.device)
        self.compression.validate()
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @property
    def resolved_device(self) -> torch.device:
        if self.device == DeviceType.AUTO:
            if torch.cuda.is_available():
                return torch.device("cuda")
            elif hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
                return torch.device("mps")
            return torch.device("cpu")
        return torch.device(self.device.value)

    def to_dict(self) -> dict:
        return {
            "compression": {
                "threshold": self.compression.threshold,
            },
            "max_workers": self.max_workers,
            "device": self.device.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuadpressConfig:
        _check_keys(data, {"compression", "max_workers", "device"}, "config")
        compression_data = data.get("compression", {})
        _check_keys(compression_data, {f.name for f in fields(CompressionConfig)}, "compression")
        compression = CompressionConfig(**compression_data)
        return cls(
            compression=compression,
            max_workers=data.get("max_workers", 1),
            device=DeviceType(data.get("device", "cpu")),
        )

    @classmethod
    def lossless(cls) -> QuadpressConfig:
        return cls(compression=CompressionConfig(threshold=0.0))

    @classmethod
    def balanced(cls) -> QuadpressConfig:
        return cls(compression=CompressionConfig(threshold=DEFAULT_THRESHOLD))

    @classmethod
    def aggressive(cls) -> QuadpressConfig:
        return cls(compression=CompressionConfig(threshold=0.01))
