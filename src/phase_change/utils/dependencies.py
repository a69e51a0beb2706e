# utils/dependencies.py
import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path

import PIL

logger = logging.getLogger(__name__)

def find_project_root():
    """Find the project root by locating the portable_tools directory"""
    # Start from current working directory
    current_dir = Path.cwd()

    # First, check current directory
    if (current_dir / 'portable_tools').exists():
        return current_dir

    # Check parent directories (up to 3 levels)
    for _ in range(3):
        if current_dir.parent == current_dir:  # We're at the root
            break
        current_dir = current_dir.parent
        if (current_dir / 'portable_tools').exists():
            return current_dir

    # Check the directory of the source tree
    script_dir = Path(__file__).resolve().parent.parent.parent.parent
    if (script_dir / 'portable_tools').exists():
        return script_dir

    # If frozen with PyInstaller
    if getattr(sys, 'frozen', False):
        return Path(sys._MEIPASS)

    # Fallback to cwd
    return Path.cwd()

def get_ffmpeg_path():
    """Get path to FFmpeg executable, preferring the portable copy over PATH"""
    project_root = find_project_root()
    ffmpeg_path = project_root / 'portable_tools' / 'ffmpeg' / 'bin' / ('ffmpeg.exe' if os.name == 'nt' else 'ffmpeg')
    if ffmpeg_path.exists():
        return ffmpeg_path

    on_path = shutil.which('ffmpeg')
    return Path(on_path) if on_path else None

def run_subprocess(cmd, timeout=5):
    """Run a short probe command and collect its output"""
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
            text=True
        )
        return {
            'returncode': result.returncode,
            'stdout': result.stdout,
            'stderr': result.stderr
        }
    except subprocess.TimeoutExpired:
        return {
            'returncode': -1,
            'stdout': '',
            'stderr': 'Process timed out'
        }
    except OSError as e:
        return {
            'returncode': -1,
            'stdout': '',
            'stderr': str(e)
        }

def check_dependencies():
    """
    Check if the codec backends are available.

    Returns:
        dict: Status of each dependency
    """
    results = {}

    # Check FFmpeg
    ffmpeg_path = get_tool_path('ffmpeg')
    if ffmpeg_path:
        logger.debug("FFmpeg path: %s", ffmpeg_path)
        result = run_subprocess([str(ffmpeg_path), '-version'])
        results['ffmpeg'] = {
            'available': result['returncode'] == 0,
            'path': str(ffmpeg_path),
            'version': result['stdout'].split('\n')[0] if result['returncode'] == 0 else None
        }
    else:
        logger.debug("FFmpeg path not found")
        results['ffmpeg'] = {'available': False, 'path': None, 'version': None}

    # Pillow is a hard requirement, so it is always importable here
    results['pillow'] = {
        'available': True,
        'path': str(Path(PIL.__file__).parent),
        'version': f"Pillow {PIL.__version__}"
    }

    return results

def get_tool_path(tool_name):
    """
    Get path to an external tool

    Args:
        tool_name: Name of the tool ('ffmpeg')

    Returns:
        Path to executable or None if not found
    """
    if tool_name == 'ffmpeg':
        return get_ffmpeg_path()
    return None
