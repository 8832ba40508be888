"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='loxley-lang',
	version='0.1.0',
	packages=['loxley'],
	entry_points={
		'console_scripts': ["loxley = loxley.cmdline:main"],
	},
	license='MIT',
	description='A Lox interpreter built from parser combinators, a slot-assigning resolver, and a tree-walking evaluator',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.11",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
		"Environment :: Console",
	],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
	extras_require={
		"test": ["pytest"],
	},
)
