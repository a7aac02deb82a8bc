"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='varith',
	author='Beth Kjos',
	author_email='kjosib@gmail.com',
	version='0.1.0',
	packages=['varith'],
	license='MIT',
	description='A dynamically-kinded value layer: scalars, sets, tuples, and dense matrices with one promotion table',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Science/Research",
		"Topic :: Scientific/Engineering :: Mathematics",
    ],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
		"numpy>=1.24",
		"scipy>=1.10",
	]
)
