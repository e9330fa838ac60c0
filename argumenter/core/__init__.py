"""
Generation core: type classifier, tag parser, constraint compiler,
procedure assembler and generator driver.
"""
