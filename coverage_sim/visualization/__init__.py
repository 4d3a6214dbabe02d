from .heatmap import plot_camera_coverage, plot_signal_strength, plot_interference

__all__ = ["plot_camera_coverage", "plot_signal_strength", "plot_interference"]
