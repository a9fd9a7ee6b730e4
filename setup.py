from setuptools import setup, find_packages

setup(
    name='graph-editor',
    version='1.0.0',
    description='Interactive node/edge graph editor engine with undo/redo',
    packages=find_packages(include=['graph_api', 'graph_api.*',
                                    'graph_editor', 'graph_editor.*']),
    install_requires=[],
    extras_require={
        'tests': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'graph-editor = graph_editor.cli:main',
        ],
    },
    python_requires='>=3.10',
)
