#!/usr/bin/env python3

from setuptools import setup

setup(
	name='beatcounter',
	version='0.0.0',
	license='GPLv3+',
	description='Tap tempo counter that reports beats and measures per minute for a chosen meter.',
	keywords='tempo tap bpm metronome midi',
	# From https://pypi.python.org/pypi?%3Aaction=list_classifiers
	classifiers=[
		# Development status
		'Development Status :: 2 - Pre-Alpha',
		# Target audience
		'Intended Audience :: End Users/Desktop',
		# Type of software
		'Topic :: Multimedia :: Sound/Audio :: MIDI',
		# Kind of software
		'Environment :: X11 Applications :: Qt',
		'Environment :: Console',
		# License (must match license field)
		'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
		# Operating systems supported
		'Operating System :: POSIX :: Linux',
		# Supported Python versions
		'Programming Language :: Python :: 3',
		'Programming Language :: Python :: 3 :: Only',
		],
	packages=['tapcounter'],
	install_requires=[
		'PyQt5',
		'python-rtmidi',
		],
	extras_require={
		'test': ['pytest'],
		},
	scripts=['beatcounter'],
)
