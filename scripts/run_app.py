#!/usr/bin/env python
"""
Open the pricing calculator page in Streamlit.

Usage:
    python scripts/run_app.py [--port 8501] [--headless]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
CALCULATOR_PAGE = PROJECT_ROOT / 'src' / 'detail_pricing' / 'ui' / 'app_streamlit.py'


def build_command(port: int, headless: bool) -> list[str]:
    cmd = [sys.executable, '-m', 'streamlit', 'run', str(CALCULATOR_PAGE), '--server.port', str(port)]
    if headless:
        cmd += ['--server.headless', 'true']
    return cmd


def main():
    parser = argparse.ArgumentParser(description="Run the pricing calculator page")
    parser.add_argument('--port', type=int, default=8501)
    parser.add_argument('--headless', action='store_true', help="don't open a browser tab")
    args = parser.parse_args()

    # The page imports detail_pricing, which may not be installed
    env = dict(os.environ)
    env['PYTHONPATH'] = os.pathsep.join(filter(None, [str(PROJECT_ROOT / 'src'), env.get('PYTHONPATH')]))

    cmd = build_command(args.port, args.headless)
    print(f"Calculator on http://localhost:{args.port}")
    try:
        sys.exit(subprocess.call(cmd, cwd=str(PROJECT_ROOT), env=env))
    except KeyboardInterrupt:
        print("\nCalculator stopped.")


if __name__ == "__main__":
    main()
