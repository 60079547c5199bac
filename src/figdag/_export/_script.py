"""Client-side script for the figdag HTML export.

The script expects a global ``FIGDAG_GRAPH`` object of the form
``{nodes: [{data: {...}}], edges: [{data: {...}}], rows: <int>}``.
"""

CYTOSCAPE_URL = "https://unpkg.com/cytoscape/dist/cytoscape.min.js"

SCRIPT = """
const COLORS = ["#3498db", "#e74c3c", "#2ecc71", "#9b59b6", "#f39c12", "#1abc9c", "#e67e22", "#d35400"];

function colorFor(id) {
  let hash = 0;
  for (const ch of String(id)) {
    hash = (hash * 31 + ch.codePointAt(0)) | 0;
  }
  return COLORS[Math.abs(hash) % COLORS.length];
}

function truncateLabel(label, maxLength = 10) {
  label = label || "";
  return label.length > maxLength ? label.slice(0, maxLength) + "..." : label;
}

const nodes = FIGDAG_GRAPH.nodes.map((node) => ({
  data: {
    ...node.data,
    fullLabel: node.data.label || "",
    label: truncateLabel(node.data.label),
    color: node.data.color || colorFor(node.data.id),
  },
}));

const cy = cytoscape({
  container: document.getElementById("cy"),
  elements: { nodes: nodes, edges: FIGDAG_GRAPH.edges },
  style: [
    {
      selector: "node",
      style: {
        "background-color": "data(color)",
        shape: "ellipse",
        width: "60px",
        height: "60px",
        label: "data(label)",
        color: "#fff",
        "text-valign": "center",
        "text-halign": "center",
        "font-size": "14px",
      },
    },
    {
      selector: "edge",
      style: {
        label: "data(label)",
        "line-color": "#ccc",
        "target-arrow-color": "#ccc",
        "target-arrow-shape": "triangle",
        "curve-style": "bezier",
        "font-size": "10px",
      },
    },
  ],
  layout: { name: "grid", rows: FIGDAG_GRAPH.rows },
});

function showDetails(title, rows, image, imageAlt) {
  const details = document.getElementById("details");
  details.replaceChildren();
  const heading = document.createElement("h3");
  heading.textContent = title;
  details.appendChild(heading);
  const list = document.createElement("dl");
  for (const [name, value] of rows) {
    const dt = document.createElement("dt");
    dt.textContent = name;
    const dd = document.createElement("dd");
    dd.textContent = value == null ? "" : String(value);
    list.append(dt, dd);
  }
  details.appendChild(list);
  if (image) {
    const img = document.createElement("img");
    img.src = image;
    img.alt = imageAlt;
    details.appendChild(img);
  }
}

cy.on("tap", "node", (event) => {
  const node = event.target;
  showDetails(
    "Node Information",
    [["ID", node.id()], ["Label", node.data("fullLabel")], ["Type", node.data("type")]],
    node.data("image"),
    "Node Image",
  );
});

cy.on("tap", "edge", (event) => {
  const edge = event.target;
  showDetails(
    "Edge Information",
    [
      ["Source", edge.data("source")],
      ["Target", edge.data("target")],
      ["Label", edge.data("label")],
      ["Action", edge.data("action")],
    ],
    edge.data("image"),
    "Edge Image",
  );
});
"""
