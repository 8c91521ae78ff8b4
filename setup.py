from setuptools import setup, find_packages
import re

# Read version from nettocalc/__init__.py
with open('nettocalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='netto-calc',
    version=version,
    packages=find_packages(include=['nettocalc', 'nettocalc.*']),
    package_data={
        'nettocalc': ['tax-rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
            'mcp[cli]>=1.0.0,<2',
        ],
    },
    entry_points={
        'console_scripts': [
            'netto-calc=nettocalc.cli.__main__:main',
            'netto-calc-mcp=nettocalc.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='German wage tax (Lohnsteuer) and net salary calculator.',
    python_requires='>=3.10',
)
