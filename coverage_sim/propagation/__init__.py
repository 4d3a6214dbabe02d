from .pathloss import free_space_path_loss, material_attenuation, environmental_attenuation, received_signal_dbm
from .interference import build_channel_map, cell_interference, optimize_channels, apply_channel_plan

__all__ = [
    "free_space_path_loss", "material_attenuation", "environmental_attenuation", "received_signal_dbm",
    "build_channel_map", "cell_interference", "optimize_channels", "apply_channel_plan",
]
