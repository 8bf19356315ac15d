"""
Streamlit frontend for the Image Animation Studio (Studio view).

This is the main entry point for the application. It handles the UI and drives
the batch of Veo image-to-video jobs.
"""

from app import *  # Re-export everything so Streamlit runs the same UI
