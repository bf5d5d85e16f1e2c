"""Model fields, options and configuration used by the generator."""