import argparse
import logging
import math
import tkinter as tk
from tkinter import messagebox
from typing import Dict, List, Optional, Tuple

from graph_model import DEFAULT_NODES, MAX_NODES, MIN_NODES, VertexId
from kruskal import EdgeDecision, MSTSession, RunState, describe_order

logger = logging.getLogger(__name__)


def circle_layout(num_nodes: int, width: float, height: float) -> Dict[VertexId, Tuple[float, float]]:
	"""Place nodes evenly on a circle, node 0 at the top."""
	cx, cy = width / 2, height / 2
	radius = min(width, height) * 0.4 - 30
	positions = {}
	for i in range(num_nodes):
		angle = (i * 2 * math.pi / num_nodes) - math.pi / 2
		positions[i] = (cx + radius * math.cos(angle), cy + radius * math.sin(angle))
	return positions


def result_lines(session: MSTSession) -> List[str]:
	mst = ", ".join(f"({e.source},{e.destination}) with weight {e.weight}" for e in session.mst)
	return [f"Edges in MST: {mst}", f"Total MST Weight: {session.total_weight}"]


class MSTVisualizer:
	RADIUS = 20
	WEIGHT_RADIUS = 12
	HIGHLIGHT_MS = 1500
	COLOR_BG = "#111927"
	COLOR_CANVAS = "#ffffff"
	COLOR_NODE = "#2a5885"
	COLOR_EDGE = "#999999"
	COLOR_EDGE_CURRENT = "#FFC107"  # amber
	COLOR_EDGE_MST = "#4CAF50"  # green
	COLOR_WEIGHT = "#333333"
	COLOR_TEXT = "#e5e7eb"

	def __init__(self, root: tk.Tk, session: MSTSession) -> None:
		self.root = root
		self.session = session
		self.root.title("Kruskal's MST Visualizer")
		self.root.configure(bg=self.COLOR_BG)

		self.canvas = tk.Canvas(self.root, width=700, height=600, bg=self.COLOR_CANVAS, highlightthickness=0)
		self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

		self.sidebar = tk.Frame(self.root, bg=self.COLOR_BG)
		self.sidebar.pack(side=tk.RIGHT, fill=tk.Y)

		self.num_nodes_var = tk.StringVar(value=str(self.session.num_nodes))
		self.source_var = tk.StringVar()
		self.destination_var = tk.StringVar()
		self.weight_var = tk.StringVar()

		self._add_field("Number of nodes", self.num_nodes_var)
		self._add_button("Set Nodes", self.on_set_nodes)
		self._add_field("Source", self.source_var)
		self._add_field("Destination", self.destination_var)
		self._add_field("Weight", self.weight_var)
		self._add_button("Add Edge", self.on_add_edge)
		self._add_button("Remove Edge", self.on_remove_edge)
		self._add_button("Clear Edges", self.on_clear_edges)
		self._add_button("Load Example", self.on_load_example)
		self._add_button("Run Algorithm", self.on_run_algorithm)
		self.btn_next = self._add_button("Next Step", self.on_next_step)
		self.btn_reset = self._add_button("Reset", self.on_reset)

		self.steps = tk.Text(self.sidebar, width=48, height=14, wrap=tk.WORD, bg="#0b1220", fg=self.COLOR_TEXT)
		self.steps.tag_configure("highlight", background="#334155")
		self.steps.tag_configure("added", foreground=self.COLOR_EDGE_MST)
		self.steps.tag_configure("rejected", foreground="#ef4444")
		self.steps.pack(padx=12, pady=8, fill=tk.BOTH, expand=True)

		self.result_var = tk.StringVar(value="")
		self.result = tk.Label(self.sidebar, textvariable=self.result_var, fg=self.COLOR_TEXT, bg=self.COLOR_BG,
			justify=tk.LEFT, anchor="w", padx=12, wraplength=360)
		self.result.pack(fill=tk.X, pady=8)

		self.positions: Dict[VertexId, Tuple[float, float]] = {}
		self.canvas.bind("<Configure>", lambda _event: self.redraw())
		self.reset_visualization()
		self.redraw()

	def _add_field(self, label: str, var: tk.StringVar) -> None:
		row = tk.Frame(self.sidebar, bg=self.COLOR_BG)
		tk.Label(row, text=label, fg=self.COLOR_TEXT, bg=self.COLOR_BG, width=16, anchor="w").pack(side=tk.LEFT)
		tk.Entry(row, textvariable=var, width=8).pack(side=tk.LEFT)
		row.pack(padx=12, pady=2, anchor="w")

	def _add_button(self, text: str, command) -> tk.Button:
		btn = tk.Button(self.sidebar, text=text, command=command)
		btn.pack(pady=2, padx=12, fill=tk.X)
		return btn

	# --- Graph editing ---

	def on_set_nodes(self) -> None:
		requested = self.num_nodes_var.get().strip()
		try:
			applied = self.session.set_num_nodes(requested)
		except ValueError as exc:
			messagebox.showerror("Invalid input", str(exc))
			return
		if str(applied) != requested:
			if applied == MIN_NODES:
				messagebox.showinfo("Number of nodes", f"Number of nodes must be at least {MIN_NODES}")
			else:
				messagebox.showinfo("Number of nodes", f"For clarity, maximum number of nodes is limited to {MAX_NODES}")
			self.num_nodes_var.set(str(applied))
		self.reset_visualization()
		self.redraw()

	def on_add_edge(self) -> None:
		try:
			self.session.add_edge(self.source_var.get(), self.destination_var.get(), self.weight_var.get())
		except ValueError as exc:
			messagebox.showerror("Invalid edge", str(exc))
			return
		# Clear inputs
		for var in (self.source_var, self.destination_var, self.weight_var):
			var.set("")
		self.reset_visualization()
		self.redraw()

	def on_remove_edge(self) -> None:
		try:
			u = int(self.source_var.get())
			v = int(self.destination_var.get())
			self.session.remove_edge(u, v)
		except ValueError:
			messagebox.showerror("Invalid input", "Please fill source and destination with valid numbers.")
			return
		except KeyError:
			messagebox.showinfo("No such edge", "There is no edge between the selected nodes.")
			return
		self.reset_visualization()
		self.redraw()

	def on_clear_edges(self) -> None:
		self.session.clear_edges()
		self.reset_visualization()
		self.redraw()

	def on_load_example(self) -> None:
		self.session.load_example()
		self.num_nodes_var.set(str(self.session.num_nodes))
		self.reset_visualization()
		self.redraw()

	# --- Running the algorithm ---

	def on_run_algorithm(self) -> None:
		if not self.session.edges:
			messagebox.showwarning("No edges", "Please add some edges first")
			return
		self.reset_visualization()
		decisions = self.session.run_batch()
		self._write_header()
		for result in decisions:
			self._write_decision(result, highlight=False)
		self.finish_visualization()

	def on_next_step(self) -> None:
		if self.session.state is RunState.IDLE:
			if not self.session.edges:
				messagebox.showwarning("No edges", "Please add some edges first")
				return
			self.session.start()
			self._write_header()
			self.btn_reset.configure(state=tk.NORMAL)

		result = self.session.step()
		if result is not None:
			self._write_decision(result, highlight=True)
		if self.session.is_done:
			self.finish_visualization()
		self.redraw()

	def on_reset(self) -> None:
		self.reset_visualization()
		self.redraw()

	def reset_visualization(self) -> None:
		self.session.reset()
		self.steps.delete("1.0", tk.END)
		self.steps.insert(tk.END, "Steps will appear here after running the algorithm.\n")
		self.result_var.set("")
		self.btn_next.configure(state=tk.NORMAL)
		self.btn_reset.configure(state=tk.DISABLED)

	def finish_visualization(self) -> None:
		self.result_var.set("\n".join(result_lines(self.session)))
		self.btn_next.configure(state=tk.DISABLED)
		self.btn_reset.configure(state=tk.NORMAL)
		self.redraw()

	def _write_header(self) -> None:
		self.steps.delete("1.0", tk.END)
		self.steps.insert(tk.END, "Algorithm Steps:\n")
		self.steps.insert(tk.END, describe_order(self.session.sorted_edges) + "\n")

	def _write_decision(self, result: EdgeDecision, highlight: bool) -> None:
		start = self.steps.index(tk.END + "-1c")
		tags = ("added",) if result.accepted else ("rejected",)
		if highlight:
			tags += ("highlight",)
		self.steps.insert(tk.END, result.narrate() + "\n", tags)
		self.steps.see(tk.END)
		if highlight:
			end = self.steps.index(tk.END + "-1c")
			# Remove highlighting from this step after a moment
			self.root.after(self.HIGHLIGHT_MS, lambda: self.steps.tag_remove("highlight", start, end))

	# --- Drawing ---

	def redraw(self) -> None:
		width = self.canvas.winfo_width() or int(self.canvas["width"])
		height = self.canvas.winfo_height() or int(self.canvas["height"])
		if width <= 1 or height <= 1:
			width, height = int(self.canvas["width"]), int(self.canvas["height"])
		self.positions = circle_layout(self.session.num_nodes, width, height)
		self.canvas.delete("all")

		mst_keys = {e.key for e in self.session.mst}
		current = self.session.engine.current_edge if self.session.state is not RunState.IDLE else None

		for edge in self.session.edges:
			x1, y1 = self.positions[edge.source]
			x2, y2 = self.positions[edge.destination]
			in_mst = edge.key in mst_keys
			is_current = current is not None and edge.key == current.key
			color = self.COLOR_EDGE_MST if in_mst else (self.COLOR_EDGE_CURRENT if is_current else self.COLOR_EDGE)
			self.canvas.create_line(x1, y1, x2, y2, fill=color, width=3 if in_mst else 1)

			mx, my = (x1 + x2) / 2, (y1 + y2) / 2
			r = self.WEIGHT_RADIUS
			self.canvas.create_oval(mx - r, my - r, mx + r, my + r, fill="white", outline="")
			label_color = color if (in_mst or is_current) else self.COLOR_WEIGHT
			self.canvas.create_text(mx, my, text=str(edge.weight), fill=label_color, font=("Arial", 10))

		for vid, (x, y) in self.positions.items():
			r = self.RADIUS
			self.canvas.create_oval(x - r, y - r, x + r, y + r, fill=self.COLOR_NODE, outline="")
			self.canvas.create_text(x, y, text=str(vid), fill="white", font=("Arial", 12, "bold"))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(prog='kruskal-visualizer',
									 description="Visualize Kruskal's minimum spanning tree algorithm")
	parser.add_argument('-n', '--nodes', default=DEFAULT_NODES, type=int,
						help=f'number of nodes ({MIN_NODES}-{MAX_NODES})')
	parser.add_argument('-e', '--example', action='store_true',
						help='start with the built-in example graph')
	parser.add_argument('--plot', action='store_true',
						help='play the run in a matplotlib window instead of the desktop app')
	parser.add_argument('-d', '--delay', default=1.5, type=float,
						help='seconds between frames in --plot mode')
	parser.add_argument('-v', '--verbose', action='store_true')
	return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
	args = parse_args(argv)
	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
						format='%(levelname)s %(name)s: %(message)s')

	session = MSTSession(args.nodes)
	if args.example:
		session.load_example()

	if args.plot:
		if not session.edges:
			print("No edges to run on. Use --example to load the example graph.")
			return
		from mst_plot import visualize_kruskal

		print("--- Starting Kruskal's Algorithm Visualization ---")
		visualize_kruskal(session.store, delay=args.delay)
		print("--- Kruskal's Visualization Complete ---")
		return

	root = tk.Tk()
	MSTVisualizer(root, session)
	root.mainloop()


if __name__ == "__main__":
	main()
