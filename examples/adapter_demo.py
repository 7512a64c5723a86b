"""Quick tour of the GitHub adapter against the real API."""

import os

from gh_bridge.adapters import GitHubAdapter
from gh_bridge.core import Config, GhBridgeError, Project


def main():
    """Query a public repository through the adapter."""

    token = os.getenv('GITHUB_TOKEN')
    if not token:
        print("❌ GITHUB_TOKEN not set!")
        print("Set it with: export GITHUB_TOKEN=your_token")
        return

    print("🔍 Testing GitHub adapter...\n")

    config = Config(user=os.getenv('GITHUB_USER', 'octocat'), token=token)
    project = Project("octocat", "Hello-World")
    adapter = GitHubAdapter(project, config)

    # 1. Repository lookup
    print(f"1. Fetching repository {project.full_name}...")
    try:
        repo = adapter.repository(project)
        print(f"   ✅ {repo.full_name}: {repo.description}\n")
    except GhBridgeError as e:
        print(f"   ❌ Failed: {e}\n")
        return

    # 2. Existence check never raises
    missing = Project("octocat", "no-such-repository-here")
    print(f"2. Does {missing.full_name} exist?")
    print(f"   ✅ {adapter.is_repository_exist(missing)}\n")

    # 3. CI status of the default branch head
    print("3. CI status of the default branch...")
    try:
        status = adapter.ci_status(repo.get_branch(repo.default_branch).commit.sha)
        print(f"   ✅ {status.state if status else 'no status'}\n")
    except GhBridgeError as e:
        print(f"   ❌ Failed: {e}\n")

    # 4. Clone URLs
    print("4. Clone URLs...")
    print(f"   HTTPS: {adapter.expand_remote_url('octocat', 'Hello-World', is_ssh=False)}")
    print(f"   SSH:   {adapter.expand_remote_url('octocat', 'Hello-World', is_ssh=True)}")


if __name__ == "__main__":
    main()
