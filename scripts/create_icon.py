#!/usr/bin/env python3
"""
Generate the Day Tally app icon.
Creates a .icns file for the macOS application bundle.
"""
import subprocess
import tempfile
from pathlib import Path

from PIL import Image, ImageDraw

# Icon sizes required for macOS icns
ICON_SIZES = [16, 32, 64, 128, 256, 512, 1024]

PAGE_COLOR = (250, 250, 247)
HEADER_COLOR = (234, 120, 40)
GRID_COLOR = (200, 200, 196)
MARK_COLOR = (60, 60, 60)


def create_calendar_icon(size: int) -> Image.Image:
    """Draw a calendar page with a grid of days at the given size."""
    # Draw at 2x and scale down for antialiasing
    scale = 2
    canvas = size * scale
    img = Image.new('RGBA', (canvas, canvas), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    pad = canvas * 0.1
    radius = canvas * 0.18
    page = [pad, pad, canvas - pad, canvas - pad]

    # Drop shadow, page, header band
    draw.rounded_rectangle([c + 4 for c in page], radius=radius, fill=(0, 0, 0, 40))
    draw.rounded_rectangle(page, radius=radius, fill=PAGE_COLOR)
    header_bottom = pad + (canvas - 2 * pad) * 0.28
    draw.rounded_rectangle([pad, pad, canvas - pad, header_bottom], radius=radius, fill=HEADER_COLOR)
    draw.rectangle([pad, header_bottom - radius, canvas - pad, header_bottom], fill=HEADER_COLOR)

    # 4 x 7 day grid with one marked day
    cols, rows = 7, 4
    left, top = pad * 1.6, header_bottom + pad * 0.6
    cell_w = (canvas - 2 * left) / cols
    cell_h = (canvas - pad * 1.6 - top) / rows
    dot = max(2, int(min(cell_w, cell_h) * 0.22))
    for row in range(rows):
        for col in range(cols):
            cx = left + cell_w * (col + 0.5)
            cy = top + cell_h * (row + 0.5)
            color = MARK_COLOR if (row, col) == (1, 4) else GRID_COLOR
            r = dot * 1.6 if color == MARK_COLOR else dot
            draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=color)

    return img.resize((size, size), Image.Resampling.LANCZOS)


def create_iconset(output_dir: Path) -> Path:
    """Create all icon sizes for the iconset."""
    iconset_dir = output_dir / "DayTally.iconset"
    iconset_dir.mkdir(parents=True, exist_ok=True)

    for size in ICON_SIZES:
        create_calendar_icon(size).save(iconset_dir / f"icon_{size}x{size}.png")
        # Retina (2x) up to 512
        if size <= 512:
            create_calendar_icon(size * 2).save(iconset_dir / f"icon_{size}x{size}@2x.png")

    return iconset_dir


def create_icns(iconset_dir: Path, output_path: Path):
    """Convert the iconset to icns using iconutil."""
    try:
        subprocess.run(
            ['iconutil', '-c', 'icns', str(iconset_dir), '-o', str(output_path)],
            check=True,
            capture_output=True
        )
        print(f"Created: {output_path}")
    except subprocess.CalledProcessError as e:
        print(f"Error creating icns: {e.stderr.decode()}")
        raise


def main():
    assets_dir = Path(__file__).parent.parent / "assets"
    assets_dir.mkdir(exist_ok=True)
    output_path = assets_dir / "DayTally.icns"

    with tempfile.TemporaryDirectory() as tmpdir:
        iconset_dir = create_iconset(Path(tmpdir))
        create_icns(iconset_dir, output_path)

    preview_path = assets_dir / "icon_preview.png"
    create_calendar_icon(512).save(preview_path)
    print(f"Preview saved: {preview_path}")


if __name__ == '__main__':
    main()
