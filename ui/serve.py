"""Simple HTTP server for the upload page."""

import http.server
import json
import socketserver
import webbrowser
from pathlib import Path

from receptro.config import Config


def main():
    """Start the UI server."""
    ui_dir = Path(__file__).parent
    config_js = f"window.RECEPTRO_API_URL = {json.dumps(Config.UI.API_URL)};\n".encode()

    class Handler(http.server.SimpleHTTPRequestHandler):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, directory=str(ui_dir), **kwargs)

        def do_GET(self):
            # The page reads the API location from here
            if self.path == "/config.js":
                self.send_response(200)
                self.send_header("Content-Type", "application/javascript")
                self.send_header("Content-Length", str(len(config_js)))
                self.end_headers()
                self.wfile.write(config_js)
                return
            super().do_GET()

    with socketserver.TCPServer(("", Config.UI.PORT), Handler) as httpd:
        url = f"http://localhost:{Config.UI.PORT}"
        print(f"Serving UI at {url} (API: {Config.UI.API_URL})")
        print("Press Ctrl+C to stop")

        webbrowser.open(url)

        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            print("\nShutting down...")


if __name__ == "__main__":
    main()
