import matplotlib as mpl


DEFAULT_LINEWIDTH = 2.0

DEFAULT_COLORS = {
    "function": "#3b9ab2",
    "samples": "#e1af00",
    "step": "#76b8c9",
    "bounds": "#f65e4d",
    "error": "#f21901",
    "target": "#4a4a4a",
}

MID_GRAY   = "#4a4a4a"
DARK_GRAY  = "#555555"
LIGHT_GRAY = "#E0E0E0"

def apply_plot_style():
    mpl.rcParams.update({
        "text.usetex": False,
        "font.family": "sans-serif",
        "font.sans-serif": ["DejaVu Sans"],
        "mathtext.fontset": "stixsans",
        "mathtext.default": "regular",
        "axes.unicode_minus": False,

        # Color styling
        "text.color": MID_GRAY,
        "axes.labelcolor": MID_GRAY,
        "axes.titlecolor": MID_GRAY,
        "axes.edgecolor": MID_GRAY,
        "xtick.color": DARK_GRAY,
        "ytick.color": DARK_GRAY,
        "xtick.direction": "in",
        "ytick.direction": "in",
        "xtick.minor.visible": True,
        "ytick.minor.visible": True,
        "legend.edgecolor": MID_GRAY,
        "legend.facecolor": "white",
        "legend.framealpha": 0.9,
        "grid.color": LIGHT_GRAY,
        "grid.alpha": 0.8,
        "figure.facecolor": "white",
        "axes.facecolor": "white",
        "savefig.facecolor": "white",
    })
