"""
UI Router

Serves the single-page manual lookup form.
"""
from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["ui"])

INDEX_HTML = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>PA Property Lookup</title>
  <style>
    body { font-family: Arial, sans-serif; max-width: 860px; margin: 32px auto; color: #222; }
    form { display: flex; gap: 8px; }
    input { flex: 1; padding: 8px; font-size: 15px; }
    button { padding: 8px 18px; font-size: 15px; cursor: pointer; }
    .grid { display: grid; grid-template-columns: 180px 1fr; gap: 6px 12px; margin-top: 20px; }
    .grid div:nth-child(odd) { font-weight: bold; }
    .tag { display: inline-block; padding: 2px 8px; border-radius: 4px; font-size: 12px; }
    .tag-real { background: #d4edda; } .tag-partial { background: #fff3cd; } .tag-demo { background: #f8d7da; }
    .error { color: #b00020; margin-top: 16px; }
  </style>
</head>
<body>
  <h2>Pennsylvania Property Lookup</h2>
  <form id="lookup-form">
    <input id="address" placeholder="50 N Duke St, Lancaster, PA 17602" autocomplete="off">
    <button type="submit">Look up</button>
  </form>
  <div id="status"></div>
  <div id="result" class="grid"></div>
  <script>
    const FIELDS = [
      ["Data Source", p => `<span class="tag tag-${p.dataSource}">${p.dataSource}</span>` +
        (p.fallbackReason ? ` (${p.fallbackReason})` : "")],
      ["Parcel ID", p => p.parcelId],
      ["Owner", p => p.owner],
      ["Acres", p => p.acres ?? "N/A"],
      ["Zoning", p => p.zoning],
      ["Municipality", p => p.municipality],
      ["Situs Address", p => p.situs],
      ["Land Use", p => p.landUse],
      ["Assessment", p => p.assessment != null ? "$" + Number(p.assessment).toLocaleString() : "N/A"],
      ["County", p => p.county],
    ];
    const escapeHtml = s => String(s).replace(/[&<>"']/g, c => ({
      "&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"
    }[c]));

    document.getElementById("lookup-form").addEventListener("submit", async (event) => {
      event.preventDefault();
      const status = document.getElementById("status");
      const result = document.getElementById("result");
      result.innerHTML = "";
      status.className = "";
      status.textContent = "Looking up...";
      try {
        const response = await fetch("/api/lookup", {
          method: "POST",
          headers: { "Content-Type": "application/json" },
          body: JSON.stringify({ address: document.getElementById("address").value }),
        });
        const data = await response.json();
        if (!response.ok) {
          status.className = "error";
          status.textContent = data.error + (data.hint ? " - " + data.hint : "");
          return;
        }
        status.textContent = data.geocode.displayName;
        result.innerHTML = FIELDS.map(([label, render]) => {
          const value = render(data.parcel);
          const html = label === "Data Source" ? value : escapeHtml(value);
          return `<div>${label}</div><div>${html}</div>`;
        }).join("");
      } catch (err) {
        status.className = "error";
        status.textContent = "Request failed: " + err;
      }
    });
  </script>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index():
    """Serve the manual lookup page."""
    return HTMLResponse(content=INDEX_HTML)
