import sys

from showfile import SectionKind, parse

text = """Name MyShow
$CUESTACK,Intro
1,Blackout,0
2,Fade Up,5
"""
show = parse(text)

# Access headers
sys.stdout.write(show.headers[0].value + "\n")  # "MyShow"

# Access the rows of every cue stack
for stack in show.sections_where(SectionKind.CUE_STACK):
    for row in stack:
        sys.stdout.write(f"{stack.arguments[0]}: cue {row[0]} -> {row[1]}\n")

# Add a cue and write the file back
show.append_row(stack, ["3", "Open", "3"])
sys.stdout.write(show.to_string())
