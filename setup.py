"""
Setup script for Day Tally.

Usage:
    pip install -e .[test]       # development install
    python setup.py py2app       # build the macOS application

The application bundle will be in the 'dist' folder. Run
scripts/create_icon.py first to generate assets/DayTally.icns.
"""
import sys

from setuptools import setup

APP = ['day_tally.py']
DATA_FILES = []
VERSION = '1.0.0'

OPTIONS = {
    'argv_emulation': False,
    'iconfile': 'assets/DayTally.icns',
    'plist': {
        'CFBundleName': 'Day Tally',
        'CFBundleDisplayName': 'Day Tally',
        'CFBundleIdentifier': 'com.daytally.app',
        'CFBundleVersion': VERSION,
        'CFBundleShortVersionString': VERSION,
        'LSMinimumSystemVersion': '10.14.0',
        'LSUIElement': True,  # Hide dock icon (menu bar app)
        'NSHighResolutionCapable': True,
    },
    'packages': [
        # Our packages
        'config',
        'core',
        'storage',
        'service',
        'app',
    ],
    'includes': [
        'rumps',
        'PIL',
        'PIL.Image',
        'PIL.ImageDraw',
        'PIL.ImageFont',
        'matplotlib',
        'matplotlib.pyplot',
        'objc',
        'Foundation',
        'AppKit',
    ],
    'excludes': [
        'tkinter',
        'pytest',
        'coverage',
        'pip',
        'PyObjCTools',
    ],
    'site_packages': True,
}

# py2app is only needed when building the bundle
py2app_kwargs = {}
if 'py2app' in sys.argv:
    py2app_kwargs = {
        'app': APP,
        'data_files': DATA_FILES,
        'options': {'py2app': OPTIONS},
        'setup_requires': ['py2app'],
    }

setup(
    name='day-tally',
    version=VERSION,
    description='Menu bar calendar with a note per day and monthly/yearly totals',
    python_requires='>=3.9',
    packages=['config', 'core', 'storage', 'service', 'app', 'app.views'],
    py_modules=['day_tally'],
    install_requires=[
        'rumps>=0.4.0; sys_platform == "darwin"',
        'pyobjc-framework-Cocoa>=9.0; sys_platform == "darwin"',
        'Pillow>=9.2.0',
        'matplotlib>=3.4',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'gui_scripts': ['day-tally = day_tally:main'],
    },
    **py2app_kwargs,
)
