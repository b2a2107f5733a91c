"""
Packaging script for PyPI.
"""
import setuptools
from pathlib import Path

README = Path(__file__).parent / "README.md"

setuptools.setup(
	name='jetlang',
	version='0.1.0',
	packages=['jetlang', ],
	entry_points={
		'console_scripts': ["jetlang = jetlang.cmdline:main"],
	},
	license='MIT',
	description='A small language of exact arithmetic over numbers and sequences, with parallel map and reduce',
	long_description=README.read_text() if README.exists() else "",
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
)
