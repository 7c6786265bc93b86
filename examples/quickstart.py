"""
atlaspacker Quick Start Example

This example packs a handful of sprite sizes and saves the atlas definition.
"""

from atlaspacker import AtlasPacker, PackConfig

packer = AtlasPacker(PackConfig(max_width=512, max_height=512, padding=1))

packer.add_image("hero", 48, 64)
packer.add_image("enemy", 32, 32)
packer.add_image("coin", 16, 16)
packer.add_image("background_tile", 128, 128)

print("Packing 4 sprites...")
packer.pack()
print(f"✅ Atlas size: {packer.packed_width}x{packer.packed_height} ({packer.efficiency:.1%} efficiency)")

for entry in packer.placed_images():
    print(f"  {entry.name}: ({entry.packed_x}, {entry.packed_y})")

atlas = packer.create_atlas("sprites", texture_path="sprites.png")
atlas.save("output/sprites.json")
print("✅ Saved to output/sprites.json")
