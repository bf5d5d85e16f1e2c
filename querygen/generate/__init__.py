"""SQL template sections, interface method checks and query struct metadata."""