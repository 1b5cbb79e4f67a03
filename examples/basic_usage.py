"""
Basic usage example for ipheatmap.
Paints a few well-known IPv4 blocks and writes a 256x256 heatmap.
"""

from ipheatmap import Heatmap, HeatmapConfig, build_report

# Step 1: Configure a session: 16 bits per pixel gives a 256x256 image
config = HeatmapConfig(
    bits_per_pixel=16,
    domain="logarithmic",
    accumulate=True,
    value_mode="scaled",
    colour_scale="viridis",
)
heatmap = Heatmap(config)

# Step 2: Feed records, the same format the CLI reads
heatmap.process_text(
    """
    10.0.0.0/8      200000
    172.16.0.0/12   500000
    192.168.0.0/16  900000
    100.64.0.0/10   120000
    8.8.8.0/24      40000000
    """
)

# Step 3: Individual addresses and ranges can be painted directly too
heatmap.paint_address("1.1.1.1", 30000000)
heatmap.paint_network("224.0.0.0/4", 65536)

# Step 4: Render
heatmap.save("heatmap.png")

print("Report:")
print(build_report(heatmap))
