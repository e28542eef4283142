"""
External landmark detector adapters.
"""
# Lazy imports to avoid mediapipe / opencv-contrib dependency when only the
# processing pipeline is used. Modules can be imported directly when needed.

__all__ = ['face_detector', 'landmark_extractor', 'landmark_mapping']
