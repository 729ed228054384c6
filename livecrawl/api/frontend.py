"""Operator page served at `/`."""

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>LiveCrawl</title>
  <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="bg-gray-100 p-6">
  <div class="max-w-4xl mx-auto bg-white p-6 rounded-lg shadow-lg">
    <h1 class="text-2xl font-bold text-center mb-4">LiveCrawl</h1>
    <form id="start-form" class="flex flex-col sm:flex-row gap-4 mb-6">
      <input type="url" id="seed-url" required
             placeholder="https://example.com"
             class="flex-grow border rounded px-4 py-2">
      <select id="workers" class="border rounded px-4 py-2">
        <option value="5">5 workers</option>
        <option value="10" selected>10 workers</option>
        <option value="15">15 workers</option>
        <option value="20">20 workers</option>
      </select>
      <button type="submit" class="bg-blue-500 text-white px-4 py-2 rounded hover:bg-blue-600">Start</button>
    </form>
    <div class="flex justify-between mb-4">
      <button id="stop" class="bg-red-500 text-white px-4 py-2 rounded hover:bg-red-600">Stop</button>
      <button id="clear" class="bg-gray-500 text-white px-4 py-2 rounded hover:bg-gray-600">Clear table</button>
    </div>
    <div id="progress" class="text-blue-600 font-semibold text-center mb-4">Ready to crawl</div>
    <table class="min-w-full bg-white border rounded-lg">
      <thead>
        <tr class="bg-gray-200 text-gray-700">
          <th class="py-2 px-4 border">URL</th>
          <th class="py-2 px-4 border">Worker</th>
          <th class="py-2 px-4 border">Time</th>
          <th class="py-2 px-4 border">Status</th>
        </tr>
      </thead>
      <tbody id="results"></tbody>
    </table>
  </div>
  <script>
    const rows = document.getElementById("results");
    const progress = document.getElementById("progress");
    let currentRun = null;

    function setProgress(text, failed) {
      progress.textContent = text;
      progress.classList.toggle("text-red-600", !!failed);
      progress.classList.toggle("text-blue-600", !failed);
    }

    function cell(text) {
      const td = document.createElement("td");
      td.className = "py-2 px-4 border";
      td.textContent = text;
      return td;
    }

    const scheme = location.protocol === "https:" ? "wss://" : "ws://";
    const socket = new WebSocket(scheme + location.host + "/ws");

    socket.onmessage = (event) => {
      const result = JSON.parse(event.data);
      if (currentRun !== null && result.run_id !== currentRun) {
        rows.innerHTML = "";
      }
      currentRun = result.run_id;
      const tr = document.createElement("tr");
      tr.className = "border-b text-center";
      tr.append(cell(result.url), cell(result.worker_id),
                cell(new Date(result.time).toLocaleString()), cell(result.status));
      rows.appendChild(tr);
      setProgress("Crawling in progress...");
    };
    socket.onclose = () => setProgress("Live feed disconnected.", true);
    socket.onerror = () => setProgress("Live feed error.", true);

    document.getElementById("start-form").addEventListener("submit", async (e) => {
      e.preventDefault();
      setProgress("Starting crawler...");
      const resp = await fetch("/start", {
        method: "POST",
        headers: {"Content-Type": "application/json"},
        body: JSON.stringify({
          url: document.getElementById("seed-url").value,
          workers: document.getElementById("workers").value,
        }),
      });
      if (!resp.ok) {
        const body = await resp.json().catch(() => ({}));
        setProgress(body.detail || "Could not start crawler.", true);
        return;
      }
      rows.innerHTML = "";
      currentRun = (await resp.json()).run_id;
    });

    document.getElementById("stop").addEventListener("click", async () => {
      await fetch("/stop", {method: "POST"});
      setProgress("Crawler stopped.", true);
    });

    document.getElementById("clear").addEventListener("click", () => {
      rows.innerHTML = "";
    });
  </script>
</body>
</html>
"""
