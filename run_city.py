# region Header
"""
run_city.py — Procedural city generator (desktop driver)

Keys: G = generate a new city, M = switch Euclidean/Manhattan for later cities.

Requires:
  pip install numpy matplotlib pillow
Optional (for 3D):
  pip install pyvista
"""
# endregion

# region Imports
import json
import logging
import tkinter as tk
from tkinter import filedialog, messagebox

from city_partition.generator import CityGenerator
from city_partition.metrics import compute_grid_metrics
from city_partition.models import CityConfig, ConfigError
from placement_export import write_placements_json
from viz import MatplotlibConsumer, archetype_counts
try:
    from city_3d import PyVistaConsumer
    HAVE_3D = True
except Exception:
    HAVE_3D = False
# endregion


# region Log Handler
class TextBoxHandler(logging.Handler):
    def __init__(self, app):
        super().__init__(level=logging.INFO)
        self.app = app
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record):
        self.app.log(self.format(record))
# endregion


# region Tk Application
class CityApp:
    def __init__(self, root, config=None):
        self.root = root
        root.title("Procedural City Generator")
        tk.Label(root, text="Procedural City Generation", font=("Helvetica", 14, "bold")).pack(pady=8)

        self.generator = CityGenerator(config)
        self.viewer = MatplotlibConsumer(self.generator, block=False)

        # region UI State and Controls
        cfg = self.generator.config
        self.width = tk.IntVar(value=cfg.width)
        self.height = tk.IntVar(value=cfg.height)
        self.seed = tk.IntVar(value=cfg.seed if cfg.seed is not None else 0)
        self.block = tk.IntVar(value=cfg.block_size)
        self.thickness = tk.IntVar(value=cfg.major_road_thickness)
        self.suppress = tk.BooleanVar(value=cfg.suppress_border_near_road)
        self.jitter = tk.BooleanVar(value=cfg.height_jitter)
        self.show_3d = tk.BooleanVar(value=False)

        frm = tk.Frame(root); frm.pack(pady=5)
        tk.Button(frm, text="Apply Settings", command=self.apply_settings).grid(row=0, column=0, padx=5)
        tk.Button(frm, text="Generate (G)", command=self.generate).grid(row=0, column=1, padx=5)
        tk.Button(frm, text="Switch Metric (M)", command=self.switch_metric).grid(row=0, column=2, padx=5)
        tk.Button(frm, text="Export JSON", command=self.export).grid(row=0, column=3, padx=5)
        for col, (label, var) in enumerate([("W:", self.width), ("H:", self.height), ("Seed:", self.seed),
                                            ("Block:", self.block), ("Thick:", self.thickness)]):
            tk.Label(frm, text=label).grid(row=1, column=2 * col, padx=(10, 0))
            tk.Entry(frm, textvariable=var, width=10 if label == "Seed:" else 5).grid(row=1, column=2 * col + 1)
        tk.Checkbutton(frm, text="Suppress Near Roads", variable=self.suppress).grid(row=2, column=0, columnspan=2)
        tk.Checkbutton(frm, text="Height Jitter", variable=self.jitter).grid(row=2, column=2, columnspan=2)
        tk.Checkbutton(frm, text="3D View", variable=self.show_3d,
                       state=tk.NORMAL if HAVE_3D else tk.DISABLED).grid(row=2, column=4, columnspan=2)

        self.logbox = tk.Text(root, height=11, width=88, state=tk.DISABLED,
                              bg="#111", fg="#0f0", font=("Courier", 9))
        self.logbox.pack(padx=10, pady=10)

        root.bind("<KeyPress-g>", lambda _e: self.generate())
        root.bind("<KeyPress-m>", lambda _e: self.switch_metric())
        # endregion

    # region Logging
    def log(self, msg):
        self.logbox.config(state=tk.NORMAL)
        self.logbox.insert(tk.END, msg + "\n")
        self.logbox.see(tk.END)
        self.logbox.config(state=tk.DISABLED)
    # endregion

    # region Settings
    def apply_settings(self):
        data = self.generator.config.to_dict()
        data.update({
            "width": self.width.get(),
            "height": self.height.get(),
            "seed": self.seed.get(),
            "block_size": self.block.get(),
            "major_road_thickness": self.thickness.get(),
            "suppress_border_near_road": self.suppress.get(),
            "height_jitter": self.jitter.get(),
        })
        try:
            self.generator.configure(CityConfig.from_dict(data))
        except (ConfigError, tk.TclError) as e:
            messagebox.showerror("Invalid settings", str(e))
            return False
        return True
    # endregion

    # region Generation
    def generate(self):
        try:
            result = self.generator.generate(consumer=self.viewer)
        except ConfigError as e:
            messagebox.showerror("Configuration error", str(e))
            return
        stats = compute_grid_metrics(result.grid)
        self.log(f"City #{result.generation}: {stats['width']}×{stats['height']} | "
                 f"{stats['sites']} sites | metric={stats['metric']} | "
                 f"road {stats['road_fraction']:.1%} in {stats['road_components']} network(s)")
        self.log("Archetypes: " + json.dumps(archetype_counts(result.placements)))

        if HAVE_3D and self.show_3d.get():
            try:
                viewer_3d = PyVistaConsumer(title=f"City #{result.generation}")
                viewer_3d.clear()
                viewer_3d.place(result.placements)
            except Exception as e:
                self.log(f"3D view failed (skipped): {e}")

    def switch_metric(self):
        metric = self.generator.toggle_metric()
        self.log(f"Metric for next city: {metric.value}")
    # endregion

    # region Export
    def export(self):
        result = self.generator.result
        if result is None:
            messagebox.showerror("Error", "Generate a city first.")
            return
        path = filedialog.asksaveasfilename(
            title="Save placements",
            defaultextension=".json",
            filetypes=[("JSON", "*.json")]
        )
        if not path:
            return
        write_placements_json(result.placements, path, generation=result.generation)
        self.log(f"Exported {len(result.placements)} placements to {path}")
    # endregion
# endregion

# region Main
if __name__ == "__main__":
    root = tk.Tk()
    app = CityApp(root)
    logging.basicConfig(level=logging.INFO)
    logging.getLogger("city_partition").addHandler(TextBoxHandler(app))
    app.log("Welcome! Press G to generate a city, M to switch the distance metric.")
    app.log("Tip: Apply Settings after editing the fields (this reseeds the session).")
    root.mainloop()
# endregion
