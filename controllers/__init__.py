"""コントローラーモジュール"""
from .convert_controller import convert_ico, describe_frames, resolve_output_path

__all__ = ['convert_ico', 'describe_frames', 'resolve_output_path']
