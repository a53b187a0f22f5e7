"""
DDL and seed data for the Jobly database.
Applied by scripts/apply_sql.py and by the integration tests.
"""

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS companies (
  handle VARCHAR(25) PRIMARY KEY CHECK (handle = lower(handle)),
  name TEXT UNIQUE NOT NULL,
  num_employees INTEGER CHECK (num_employees >= 0),
  description TEXT NOT NULL DEFAULT '',
  logo_url TEXT
);

CREATE TABLE IF NOT EXISTS jobs (
  id SERIAL PRIMARY KEY,
  title TEXT NOT NULL,
  salary INTEGER CHECK (salary >= 0),
  equity NUMERIC CHECK (equity <= 1.0),
  company_handle VARCHAR(25) NOT NULL
    REFERENCES companies ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS users (
  username VARCHAR(25) PRIMARY KEY,
  password TEXT NOT NULL,
  first_name TEXT NOT NULL,
  last_name TEXT NOT NULL,
  email TEXT NOT NULL CHECK (position('@' IN email) > 1),
  is_admin BOOLEAN NOT NULL DEFAULT FALSE
);

CREATE TABLE IF NOT EXISTS applications (
  username VARCHAR(25)
    REFERENCES users ON DELETE CASCADE,
  job_id INTEGER
    REFERENCES jobs ON DELETE CASCADE,
  PRIMARY KEY (username, job_id)
);
"""

TRUNCATE_SQL = "TRUNCATE applications, jobs, users, companies RESTART IDENTITY CASCADE"

SEED_SQL = """
INSERT INTO companies (handle, name, num_employees, description, logo_url)
VALUES ('anderson-arias-morrow', 'Anderson, Arias and Morrow', 245,
        'Somebody program how I. Face give away discussion view act inside.', '/logos/logo3.png'),
       ('bauer-gallagher', 'Bauer-Gallagher', 862,
        'Difficult ready trip question produce produce someone.', NULL),
       ('hall-davis', 'Hall-Davis', 749,
        'Adult go economic off into. Suddenly happy according only common.', '/logos/logo2.png')
ON CONFLICT DO NOTHING;

INSERT INTO jobs (title, salary, equity, company_handle)
VALUES ('Conservator, furniture', 110000, 0, 'anderson-arias-morrow'),
       ('Information officer', 200000, NULL, 'bauer-gallagher'),
       ('Consulting civil engineer', 60000, 0.037, 'hall-davis');
"""
