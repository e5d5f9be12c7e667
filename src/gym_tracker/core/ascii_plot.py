"""
ASCII plotting for strength progress visualization.

Creates terminal-friendly line charts of one value per date.
"""

from datetime import datetime


def create_progress_plot(
    points: list[tuple[str, float]],
    width: int = 60,
    height: int = 16,
    title: str = "Progress",
    unit: str = "kg",
) -> str:
    """
    Create an ASCII line chart of values over time.

    Args:
        points: (ISO date, value) pairs, already in the display unit
        width: Plot width in characters
        height: Plot height in lines
        title: Chart title
        unit: Unit shown on the y-axis legend

    Returns:
        ASCII art string
    """
    if not points:
        return "No sets logged yet. Log a set to see progress."

    data = sorted(
        (datetime.strptime(date, "%Y-%m-%d"), value) for date, value in points
    )

    min_date = data[0][0]
    max_date = data[-1][0]
    date_range = (max_date - min_date).days
    if date_range == 0:
        date_range = 1

    min_val = min(v for _, v in data)
    max_val = max(v for _, v in data)

    # 5% headroom so points do not sit on the frame
    pad = (max_val - min_val) * 0.05 or max(abs(max_val) * 0.05, 1.0)
    y_min = min_val - pad
    y_max = max_val + pad
    y_range = y_max - y_min

    label_width = 9  # "1234.5 ┤" plus a space
    plot_width = width - label_width
    plot_height = height - 3  # Leave room for x-axis and title

    grid = [[" " for _ in range(plot_width)] for _ in range(plot_height)]

    # Convert points to grid coordinates
    plot_points: list[tuple[int, int, float]] = []  # (x, y, value)
    for date, value in data:
        days_from_start = (date - min_date).days
        x = int((days_from_start / date_range) * (plot_width - 1))
        y = int(((value - y_min) / y_range) * (plot_height - 1))
        y = plot_height - 1 - y  # Flip y-axis
        plot_points.append((x, y, value))

    def _p(x: int, r: int, ch: str) -> None:
        if 0 <= x < plot_width and 0 <= r < plot_height and grid[r][x] == " ":
            grid[r][x] = ch

    # Draw connecting lines (staircase style: ╭─╯)
    for i in range(len(plot_points) - 1):
        col1, row1, _ = plot_points[i]
        col2, row2, _ = plot_points[i + 1]

        n_rows = abs(row2 - row1)
        if n_rows == 0:
            for x in range(col1 + 1, col2):
                _p(x, row1, "─")
            continue

        if col1 == col2:
            for r in range(min(row1, row2) + 1, max(row1, row2)):
                _p(col1, r, "│")
            continue

        row_dir = -1 if row2 < row1 else 1  # -1 = going up (higher value)
        up = row_dir == -1
        corner_exit = "╯" if up else "╮"
        corner_entry = "╭" if up else "╰"

        n_segs = n_rows + 1
        for step in range(n_segs):
            row = row1 + row_dir * step
            pivot_in = col1 + (col2 - col1) * step // n_segs
            pivot_out = col1 + (col2 - col1) * (step + 1) // n_segs

            if step == 0:
                for x in range(col1 + 1, pivot_out):
                    _p(x, row, "─")
                _p(pivot_out, row, corner_exit)
            elif step == n_segs - 1:
                _p(pivot_in, row, corner_entry)
                for x in range(pivot_in + 1, col2):
                    _p(x, row, "─")
            else:
                _p(pivot_in, row, corner_entry)
                for x in range(pivot_in + 1, pivot_out):
                    _p(x, row, "─")
                _p(pivot_out, row, corner_exit)

    # Data points overwrite line characters
    for x, y, _ in plot_points:
        grid[y][x] = "●"

    lines = [title, "─" * width]

    for i, row in enumerate(grid):
        y_val = y_max - (i / (plot_height - 1)) * y_range if plot_height > 1 else y_max
        lines.append(f"{y_val:7.1f} ┤" + "".join(row))

    lines.append("─" * width)

    # X-axis date labels
    mid_date = min_date + (max_date - min_date) / 2
    label_line = [" "] * plot_width
    for x_pos, date in ((0, min_date), (plot_width // 2, mid_date), (plot_width - 6, max_date)):
        for j, c in enumerate(date.strftime("%b %d")):
            if 0 <= x_pos + j < plot_width:
                label_line[x_pos + j] = c
    lines.append(" " * label_width + "".join(label_line))

    lines.append(f"● best per day ({unit})")

    return "\n".join(lines)
