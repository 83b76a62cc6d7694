#!/usr/bin/env python3
"""
CLI tool to render PNG frames from a saved snake replay

Usage:
    python render_replay.py <path_to_replay.json>

Examples:
    # Render every frame into ./frames/<game_id>/
    python render_replay.py completed_games/snake_game_xyz.json

    # Custom output directory and cell size
    python render_replay.py replay.json --out-dir ./my_frames --cell-size 32

    # Only every 5th frame
    python render_replay.py replay.json --every 5
"""

import os
import sys
import json
import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.frame_renderer import FrameRenderer, state_from_dict
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def load_local_replay(file_path: str) -> Dict[str, Any]:
    """Load replay data from a local JSON file"""
    logger.info(f"Loading replay from local file: {file_path}")

    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Replay file not found: {file_path}")

    with open(file_path, 'r') as f:
        replay_data = json.load(f)

    logger.info(f"Loaded replay with {len(replay_data.get('rounds', []))} frames")
    return replay_data


def extract_game_id_from_filename(file_path: str) -> str:
    """Extract game ID from filename"""
    # Expected format: snake_game_<game_id>.json
    filename = Path(file_path).stem
    if filename.startswith('snake_game_'):
        return filename.replace('snake_game_', '')
    return filename


def render_replay(replay_data: Dict[str, Any], out_dir: str, cell_size: int = 20, every: int = 1) -> List[str]:
    """
    Render replay rounds to numbered PNG files.

    Frames recorded during a game-over transition get the game-over box.

    Returns:
        Paths of the written files
    """
    if every < 1:
        raise ValueError(f"every must be at least 1, got {every}")

    renderer = FrameRenderer(cell_size=cell_size)
    rounds = replay_data.get("rounds", [])
    paths = []
    for i, round_data in enumerate(rounds):
        if i % every:
            continue
        state = state_from_dict(round_data)
        message = f"Game Over! Score: {state.score}" if state.game_over else None
        path = os.path.join(out_dir, f"frame_{i:05d}.png")
        paths.append(renderer.save_frame(state, path, message))

    logger.info(f"Rendered {len(paths)} of {len(rounds)} frames into {out_dir}")
    return paths


def main():
    parser = argparse.ArgumentParser(
        description='Render PNG frames from snake replays',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('replay', type=str, help='Path to replay JSON file')
    parser.add_argument(
        '--out-dir', '-o',
        type=str,
        help='Output directory (default: frames/<game_id>)'
    )
    parser.add_argument(
        '--cell-size',
        type=int,
        default=20,
        help='Pixels per grid cell (default: 20)'
    )
    parser.add_argument(
        '--every',
        type=int,
        default=1,
        help='Render every Nth frame (default: 1)'
    )

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        replay_data = load_local_replay(args.replay)
        game_id = replay_data.get("metadata", {}).get("game_id") or extract_game_id_from_filename(args.replay)
        out_dir = args.out_dir or os.path.join("frames", game_id)

        paths = render_replay(replay_data, out_dir, args.cell_size, args.every)
        print(f"\n✓ Rendered {len(paths)} frames to {out_dir}")
        return 0

    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except (ValueError, KeyError) as e:
        logger.error(f"Invalid replay: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
