import setuptools

setuptools.setup(
	name='bnf-graft',
	version='0.1.0',
	packages=[
		'bnfgraft',
		'bnfgraft.grammar',
		'bnfgraft.parsing',
		'bnfgraft.support',
		'bnfgraft.tree',
	],
	description='Grammar-driven parsing into decoratable parse trees, for source-to-source rewriting',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.9',
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Development Status :: 3 - Alpha",
    ],
)
