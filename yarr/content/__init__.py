"""HTML utilities: tree and selectors, sanitizing, readability, feed discovery and embeds."""