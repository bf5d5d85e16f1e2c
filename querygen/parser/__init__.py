"""Parameters, methods and interfaces described for code generation."""