"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='exemplar-types',
	version='0.1.0',
	packages=['exemplar'],
	package_data={
		'exemplar': ["Exemplar.md", "*.automaton"],
	},
	entry_points={
		'console_scripts': ["exemplar = exemplar.cmdline:main"],
	},
	license='MIT',
	description='Generate type declarations from example values, so generated code keeps up with the code it mirrors',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Code Generators",
		"Topic :: Software Development :: Compilers",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
