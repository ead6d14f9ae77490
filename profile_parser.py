#!/usr/bin/env python3
"""Profile CompactHTML to find performance bottlenecks."""

import cProfile
import io
import pstats

from compacthtml import minimize

# Sample HTML
html = """
<!DOCTYPE html>
<html>
<head><title>Test</title><style> body { margin: 0; } </style></head>
<body>
    <!-- navigation -->
    <div class="container"   id=main>
        <h1>Heading</h1>
        <p>Paragraph     one
           spans lines</p>
        <p>Paragraph 2<br/>with a break</p>
        <pre>  keep   this  </pre>
        <ul><li>One</li><li>Two</li></ul>
    </div>
</body>
</html>
""" * 100  # Repeat for more meaningful results

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    _ = minimize(html)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(50)  # Top 50 functions
print(s.getvalue())
