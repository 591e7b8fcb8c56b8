"""FastAPI app: search page plus the two JSON endpoints it calls.

    GET  /                      → the search page
    POST /api/youtube/search    → {"results": [...]}
    POST /api/youtube/process   → {"chordChart": ..., "html": ..., "dev": {...}}

Errors come back as ``{"error": "<message>"}`` with status 500.  Routes are
plain ``def`` so the blocking pipeline runs in FastAPI's threadpool.
"""

import logging

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from .config import Settings
from .exceptions import ConfigError
from .formatter import format_chart
from .pipeline import ChartPipeline
from .render import render_html
from .services.youtube import YouTubeClient

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    query: str


class ProcessRequest(BaseModel):
    videoId: str


def _error(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(settings: Settings | None = None, pipeline: ChartPipeline | None = None) -> FastAPI:
    """Build the app.  *settings* defaults to :meth:`Settings.from_env`."""
    if settings is None:
        settings = Settings.from_env()
    if pipeline is None:
        pipeline = ChartPipeline(settings)
    app = FastAPI(title="GuitarGPT")

    @app.get("/", response_class=HTMLResponse)
    def home():
        return HTMLResponse(PAGE)

    @app.post("/api/youtube/search")
    def search(body: SearchRequest):
        if not settings.youtube_api_key:
            return _error("YouTube API key not configured")
        try:
            client = YouTubeClient(settings.youtube_api_key)
            results = client.search(body.query, max_results=settings.search_max_results)
        except Exception:
            logger.exception("YouTube search error")
            return _error("Failed to search YouTube")
        return {"results": [r.to_dict() for r in results]}

    @app.post("/api/youtube/process")
    def process(body: ProcessRequest):
        try:
            result = pipeline.process(body.videoId)
        except ConfigError:
            return _error("OpenAI API key not configured")
        except Exception:
            logger.exception("Error processing video %s", body.videoId)
            return _error("Failed to process video")
        payload = result.to_dict()
        payload["html"] = render_html(format_chart(result.chord_chart))
        return payload

    return app


PAGE = """<!doctype html>
<meta charset="utf-8"/>
<title>GuitarGPT - YouTube Chord Chart Generator</title>
<style>
  body { font-family: system-ui; background: #000; color: #fff; }
  main { max-width: 900px; margin: 2rem auto; }
  .video { display: flex; gap: 1rem; align-items: center; padding: .75rem; margin: .5rem 0;
           border: 1px solid #333; border-radius: 8px; background: #111; }
  .video img { width: 128px; border-radius: 4px; }
  .video .meta { flex: 1; min-width: 0; }
  #chart { background: #f3f4f6; color: #1f2937; padding: 1rem; border-radius: 8px;
           font-family: ui-monospace, Menlo, Consolas, monospace; display: none; }
  .pair, .section, .line { margin-bottom: .5rem; }
  .chords, .words { display: flex; gap: .5rem; min-height: 1.5em; }
  .chord, .word { min-width: 2.5em; text-align: center; }
  .chord, .section strong { color: #1d4ed8; font-weight: bold; }
  #error { color: #f87171; }
</style>
<main>
  <h1>GuitarGPT - YouTube Chord Chart Generator</h1>
  <form id="search">
    <input id="q" type="text" placeholder="Search for a song on YouTube..." autocomplete="off" size="60"/>
    <button>Search</button>
  </form>
  <p id="error"></p>
  <div id="results"></div>
  <h2 id="chart-title"></h2>
  <div id="chart"></div>
</main>
<script>
const results = document.getElementById('results');
const chart = document.getElementById('chart');
const errorBox = document.getElementById('error');
const chartTitle = document.getElementById('chart-title');

async function post(url, body) {
  const r = await fetch(url, {
    method: 'POST',
    headers: {'Content-Type': 'application/json'},
    body: JSON.stringify(body),
  });
  const j = await r.json();
  if (!r.ok) throw new Error(j.error || 'Request failed');
  return j;
}

function videoRow(v) {
  const row = document.createElement('div');
  row.className = 'video';
  const img = document.createElement('img');
  img.src = v.thumbnail;
  const meta = document.createElement('div');
  meta.className = 'meta';
  meta.innerHTML = '<strong></strong><br/><small></small>';
  meta.querySelector('strong').textContent = v.title;
  meta.querySelector('small').textContent = v.channelTitle;
  const btn = document.createElement('button');
  btn.textContent = 'Create Chart';
  btn.onclick = () => createChart(v, btn);
  row.append(img, meta, btn);
  return row;
}

async function createChart(v, btn) {
  errorBox.textContent = '';
  btn.disabled = true;
  btn.textContent = 'Processing...';
  chartTitle.textContent = 'Processing... this may take 30 seconds or more.';
  chart.style.display = 'none';
  try {
    const j = await post('/api/youtube/process', {videoId: v.id});
    chartTitle.textContent = v.channelTitle + ' - ' + v.title;
    chart.innerHTML = j.html;
    chart.style.display = 'block';
  } catch (err) {
    chartTitle.textContent = '';
    errorBox.textContent = err.message;
  } finally {
    btn.disabled = false;
    btn.textContent = 'Create Chart';
  }
}

document.getElementById('search').addEventListener('submit', async (e) => {
  e.preventDefault();
  const query = document.getElementById('q').value.trim();
  if (!query) return;
  errorBox.textContent = '';
  results.textContent = 'Searching...';
  try {
    const j = await post('/api/youtube/search', {query});
    results.textContent = '';
    j.results.forEach(v => results.append(videoRow(v)));
  } catch (err) {
    results.textContent = '';
    errorBox.textContent = err.message;
  }
});
</script>
"""
