"""
atlaspacker Advanced Example

This example shows failure handling, re-packing after changing the limits,
and the fallback used for reserved pack methods.
"""

import logging

from atlaspacker import AtlasPacker, PackConfig, PackMethod, NoSpaceError

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

packer = AtlasPacker(PackConfig(max_width=256, max_height=256))
packer.add_image("banner", 250, 120, payload="ui/banner.png")
packer.add_image("panel", 200, 140, payload="ui/panel.png")

# 121 + 141 rows do not fit in 256
try:
    packer.pack()
except NoSpaceError as e:
    print(f"Pack failed for '{e.name}' ({e.width}x{e.height}), growing the atlas")
    packer.configure(max_height=512)
    packer.pack()

print(f"✅ {packer.packed_width}x{packer.packed_height}")
print(f"Payload of 'panel': {packer.get_image_payload('panel')}")

# MaxRects is reserved; it logs a warning and produces the Shelf layout
packer.configure(method=PackMethod.MAXRECTS)
packer.pack()
print(f"✅ MaxRects (shelf fallback): {packer.result}")
