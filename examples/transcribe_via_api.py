#!/usr/bin/env python
import argparse
from pathlib import Path

import requests


def main() -> int:
    ap = argparse.ArgumentParser(description="Transcribe audio via the MIDI Bridge API")
    ap.add_argument("audio", help="Path to audio file")
    ap.add_argument("--server", default="http://localhost:8000", help="API server base URL")
    ap.add_argument("--out", type=str, default=None, help="Where to save the MIDI file")
    # The server waits for the conversion program, which may take minutes
    ap.add_argument("--timeout", type=float, default=360.0, help="Request timeout in seconds")
    args = ap.parse_args()

    base = args.server.rstrip("/")
    audio = Path(args.audio)

    with open(audio, "rb") as f:
        files = {"audio_file": (audio.name, f, "application/octet-stream")}
        r = requests.post(f"{base}/transcribe", files=files, timeout=args.timeout)

    if not r.ok:
        print(f"Failed ({r.status_code}):", r.json().get("detail", r.text))
        return 1

    data = r.json()
    print("Notes:", data.get("num_notes"), "in", f"{data.get('processing_time', 0):.1f}s")

    out = Path(args.out) if args.out else audio.with_suffix(".mid")
    resp = requests.get(f"{base}{data['midi_url']}", timeout=120)
    resp.raise_for_status()
    out.write_bytes(resp.content)
    print("Saved:", out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
