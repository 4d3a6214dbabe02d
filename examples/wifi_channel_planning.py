#!/usr/bin/env python3
"""Wi-Fi channel planning example.

Three access points all start on 2.4 GHz channel 6. The wireless analysis
reports the resulting interference, then the suggested channel plan is
applied and the analysis re-run for comparison.
"""

from coverage_sim.core import (
    AccessPoint, AnalysisEngine, Bounds, ChannelAssignment, FloorElement, FloorPlan, Point, WirelessClient,
)
from coverage_sim.propagation import apply_channel_plan
from coverage_sim.visualization import plot_interference, plot_signal_strength


def access_point(ap_id: str, x: float, y: float) -> AccessPoint:
    return AccessPoint(
        id=ap_id,
        position=Point(x, y),
        transmit_power_dbm=23,
        channels=(ChannelAssignment("2.4GHz", 6), ChannelAssignment("5GHz", 36)),
    )


def main() -> None:
    plan = FloorPlan(
        Bounds(24, 12),
        (
            FloorElement("wall", Point(8, 0), Point(8, 9), material="brick"),
            FloorElement("wall", Point(16, 3), Point(16, 12), material="brick"),
        ),
        id="warehouse",
    )
    aps = [access_point("ap-west", 4, 6), access_point("ap-mid", 12, 6), access_point("ap-east", 20, 6)]
    clients = [
        WirelessClient("cam-dock", Point(23, 1), name="Loading dock camera"),
        WirelessClient("cam-gate", Point(1, 11), name="Gate camera"),
    ]

    engine = AnalysisEngine()
    before = engine.analyze_wireless(plan, aps, clients)
    print(f"Before: interference {before.statistics.interference_level:.2f}, "
          f"avg signal {before.statistics.average_signal_dbm:.1f} dBm")
    print("Suggested channels:")
    for network, channel in before.channel_plan.items():
        print(f"  {network:>12s} -> {channel}")

    tuned = apply_channel_plan(aps, before.channel_plan)
    after = engine.analyze_wireless(plan, tuned, clients)
    print(f"After:  interference {after.statistics.interference_level:.2f}")
    for rec in after.recommendations:
        print(f"  [{rec.id}] {rec.title}: {rec.description}")

    plot_signal_strength(after, plan, save_path="wifi_signal.png")
    plot_interference(before, plan, save_path="wifi_interference_before.png")
    plot_interference(after, plan, save_path="wifi_interference_after.png")
    print("Heatmaps saved: wifi_signal.png, wifi_interference_before.png, wifi_interference_after.png")


if __name__ == "__main__":
    main()
