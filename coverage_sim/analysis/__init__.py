from .camera import point_coverage, rasterize_camera
from .wireless import point_signal, rasterize_access_point, apply_interference
from .statistics import CoverageStatistics, WirelessStatistics, camera_statistics, wireless_statistics
from .recommendations import Recommendation, RecommendedAction, camera_recommendations, wireless_recommendations
from .network import NetworkAnalysis, analyze_network, build_graph, shortest_path

__all__ = [
    "point_coverage", "rasterize_camera",
    "point_signal", "rasterize_access_point", "apply_interference",
    "CoverageStatistics", "WirelessStatistics", "camera_statistics", "wireless_statistics",
    "Recommendation", "RecommendedAction", "camera_recommendations", "wireless_recommendations",
    "NetworkAnalysis", "analyze_network", "build_graph", "shortest_path",
]
