#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Configuration for the command-line renderer

The engine itself never reads these; scripts build the engine from them.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Renderer settings, overridable with CV_* environment variables"""

    # ========== Fonts ==========
    # Extra directories searched before the default font locations
    font_dirs: List[str] = []

    # ========== Defaults ==========
    default_language: str = "en"  # en | tr
    default_style: str = "global"  # global | turkey

    # ========== Output ==========
    output_dir: str = "output"
    log_level: str = "INFO"

    class Config:
        env_prefix = "CV_"
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        extra = "ignore"

    def get_output_dir(self) -> Path:
        """Output directory, relative paths resolved against the project root"""
        path = Path(self.output_dir)
        if not path.is_absolute():
            path = BASE_DIR / path
        return path

    def print_config(self):
        """Print configuration summary"""
        print("\n" + "=" * 50)
        print("CONFIGURATION")
        print("=" * 50)
        print(f"Font dirs:       {', '.join(self.font_dirs) or '(defaults)'}")
        print(f"Language:        {self.default_language}")
        print(f"Style:           {self.default_style}")
        print(f"Output dir:      {self.get_output_dir()}")
        print(f"Log level:       {self.log_level}")
        print("=" * 50 + "\n")

